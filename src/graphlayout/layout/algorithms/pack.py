"""Circle packing layout.

Leaves get radius √weight. Siblings are packed with the front-chain
algorithm (Wang et al. 2006), and each parent's radius is the smallest
circle enclosing its children (Welzl's move-to-front scheme over circles).
Enclosure shows the hierarchy, so there is no circular variant.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from graphlayout.ir.graph import CanonicalGraph
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.algorithms.hierarchy import ROOT_PARAM, WEIGHT_PARAM, base_attrs, forest_of, subtree_weights
from graphlayout.layout.params import Param, node_values
from graphlayout.layout.types import AlgorithmOutput, RawPosition


@dataclass
class Circle:
    x: float
    y: float
    r: float


# ─── Enclosing circle ────────────────────────────────────────────────────────


def _encloses_not(a: Circle, b: Circle) -> bool:
    dr = a.r - b.r
    dx = b.x - a.x
    dy = b.y - a.y
    return dr < 0 or dr * dr < dx * dx + dy * dy


def _encloses_weak(a: Circle, b: Circle) -> bool:
    dr = a.r - b.r + max(a.r, b.r, 1.0) * 1e-9
    dx = b.x - a.x
    dy = b.y - a.y
    return dr > 0 and dr * dr > dx * dx + dy * dy


def _encloses_weak_all(a: Circle, basis: list[Circle]) -> bool:
    return all(_encloses_weak(a, b) for b in basis)


def _enclose_two(a: Circle, b: Circle) -> Circle:
    x21 = b.x - a.x
    y21 = b.y - a.y
    r21 = b.r - a.r
    length = math.hypot(x21, y21)
    if length == 0:
        return Circle(a.x, a.y, max(a.r, b.r))
    return Circle(
        (a.x + b.x + x21 / length * r21) / 2,
        (a.y + b.y + y21 / length * r21) / 2,
        (length + a.r + b.r) / 2,
    )


def _enclose_three(a: Circle, b: Circle, c: Circle) -> Circle:
    x1, y1, r1 = a.x, a.y, a.r
    a2 = x1 - b.x
    a3 = x1 - c.x
    b2 = y1 - b.y
    b3 = y1 - c.y
    c2 = b.r - r1
    c3 = c.r - r1
    d1 = x1 * x1 + y1 * y1 - r1 * r1
    d2 = d1 - b.x * b.x - b.y * b.y + b.r * b.r
    d3 = d1 - c.x * c.x - c.y * c.y + c.r * c.r
    ab = a3 * b2 - a2 * b3
    if ab == 0:
        # Collinear centres: the pairwise enclosure of the outermost two wins.
        candidates = [_enclose_two(a, b), _enclose_two(a, c), _enclose_two(b, c)]
        return max(candidates, key=lambda e: e.r)
    xa = (b2 * d3 - b3 * d2) / (ab * 2) - x1
    xb = (b3 * c2 - b2 * c3) / ab
    ya = (a3 * d2 - a2 * d3) / (ab * 2) - y1
    yb = (a2 * c3 - a3 * c2) / ab
    qa = xb * xb + yb * yb - 1
    qb = 2 * (r1 + xa * xb + ya * yb)
    qc = xa * xa + ya * ya - r1 * r1
    if abs(qa) > 1e-6:
        r = -(qb + math.sqrt(max(0.0, qb * qb - 4 * qa * qc))) / (2 * qa)
    else:
        r = -qc / qb
    return Circle(x1 + xa + xb * r, y1 + ya + yb * r, r)


def _enclose_basis(basis: list[Circle]) -> Circle:
    if len(basis) == 1:
        return Circle(basis[0].x, basis[0].y, basis[0].r)
    if len(basis) == 2:
        return _enclose_two(basis[0], basis[1])
    return _enclose_three(basis[0], basis[1], basis[2])


def _extend_basis(basis: list[Circle], p: Circle) -> list[Circle] | None:
    if _encloses_weak_all(p, basis):
        return [p]

    for b in basis:
        if _encloses_not(p, b) and _encloses_weak_all(_enclose_two(b, p), basis):
            return [b, p]

    for i in range(len(basis) - 1):
        for j in range(i + 1, len(basis)):
            bi, bj = basis[i], basis[j]
            if (
                _encloses_not(_enclose_two(bi, bj), p)
                and _encloses_not(_enclose_two(bi, p), bj)
                and _encloses_not(_enclose_two(bj, p), bi)
                and _encloses_weak_all(_enclose_three(bi, bj, p), basis)
            ):
                return [bi, bj, p]

    return None


def enclose(circles: list[Circle]) -> Circle:
    """Smallest circle enclosing all ``circles``."""
    if not circles:
        return Circle(0.0, 0.0, 0.0)
    basis: list[Circle] = []
    enclosing: Circle | None = None
    i = 0
    while i < len(circles):
        p = circles[i]
        if enclosing is not None and _encloses_weak(enclosing, p):
            i += 1
            continue
        extended = _extend_basis(basis, p)
        if extended is None:
            # Rounding left no valid basis; settle for a non-minimal enclosure.
            return _enclose_fallback(circles)
        basis = extended
        enclosing = _enclose_basis(basis)
        i = 0
    assert enclosing is not None
    return enclosing


def _enclose_fallback(circles: list[Circle]) -> Circle:
    cx = sum(c.x for c in circles) / len(circles)
    cy = sum(c.y for c in circles) / len(circles)
    r = max(math.hypot(c.x - cx, c.y - cy) + c.r for c in circles)
    return Circle(cx, cy, r * (1 + 1e-9))


# ─── Sibling packing (front chain) ───────────────────────────────────────────


def _place(b: Circle, a: Circle, c: Circle) -> None:
    """Put ``c`` tangent to both ``a`` and ``b``."""
    dx = b.x - a.x
    dy = b.y - a.y
    d2 = dx * dx + dy * dy
    if d2:
        a2 = (a.r + c.r) ** 2
        b2 = (b.r + c.r) ** 2
        if a2 > b2:
            x = (d2 + b2 - a2) / (2 * d2)
            y = math.sqrt(max(0.0, b2 / d2 - x * x))
            c.x = b.x - x * dx - y * dy
            c.y = b.y - x * dy + y * dx
        else:
            x = (d2 + a2 - b2) / (2 * d2)
            y = math.sqrt(max(0.0, a2 / d2 - x * x))
            c.x = a.x + x * dx - y * dy
            c.y = a.y + x * dy + y * dx
    else:
        c.x = a.x + c.r
        c.y = a.y


def _intersects(a: Circle, b: Circle) -> bool:
    dr = a.r + b.r - 1e-6
    dx = b.x - a.x
    dy = b.y - a.y
    return dr > 0 and dr * dr > dx * dx + dy * dy


class _ChainNode:
    __slots__ = ("circle", "next", "previous")

    def __init__(self, circle: Circle) -> None:
        self.circle = circle
        self.next: _ChainNode = self
        self.previous: _ChainNode = self


def _score(node: _ChainNode) -> float:
    a = node.circle
    b = node.next.circle
    ab = a.r + b.r
    if ab == 0:
        return a.x * a.x + a.y * a.y
    dx = (a.x * b.r + b.x * a.r) / ab
    dy = (a.y * b.r + b.y * a.r) / ab
    return dx * dx + dy * dy


def pack_siblings(circles: list[Circle]) -> float:
    """Pack circles around the origin in place; return the enclosing radius."""
    n = len(circles)
    if n == 0:
        return 0.0

    a = circles[0]
    a.x, a.y = 0.0, 0.0
    if n == 1:
        return a.r

    b = circles[1]
    a.x = -b.r
    b.x, b.y = a.r, 0.0
    if n == 2:
        return a.r + b.r

    _place(b, a, circles[2])

    na, nb, nc = _ChainNode(a), _ChainNode(b), _ChainNode(circles[2])
    na.next = nc.previous = nb
    nb.next = na.previous = nc
    nc.next = nb.previous = na

    i = 3
    while i < n:
        c = circles[i]
        _place(na.circle, nb.circle, c)
        node = _ChainNode(c)

        # Find the closest circle on the front chain that intersects the new one.
        j, k = nb.next, na.previous
        sj, sk = nb.circle.r, na.circle.r
        retry = False
        while True:
            if sj <= sk:
                if _intersects(j.circle, c):
                    nb = j
                    na.next = nb
                    nb.previous = na
                    retry = True
                    break
                sj += j.circle.r
                j = j.next
            else:
                if _intersects(k.circle, c):
                    na = k
                    na.next = nb
                    nb.previous = na
                    retry = True
                    break
                sk += k.circle.r
                k = k.previous
            if j is k.next:
                break
        if retry:
            continue

        node.previous = na
        node.next = nb
        na.next = node
        nb.previous = node
        nb = node

        # Restart from the chain pair closest to the centroid.
        best_score = _score(na)
        cursor = node.next
        while cursor is not nb:
            s = _score(cursor)
            if s < best_score:
                na, best_score = cursor, s
            cursor = cursor.next
        nb = na.next
        i += 1

    chain = [nb.circle]
    cursor = nb.next
    while cursor is not nb:
        chain.append(cursor.circle)
        cursor = cursor.next
    e = enclose(chain)

    for circle in circles:
        circle.x -= e.x
        circle.y -= e.y
    return e.r


# ─── Layout ──────────────────────────────────────────────────────────────────


def layout_circlepack(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    forest = forest_of(canonical, params)
    weights = subtree_weights(canonical, forest, params["weight"])
    sort_by = params["sort_by"]
    sort_keys = node_values(canonical, sort_by, "sort_by") if sort_by is not None else None

    count = canonical.node_count()
    circles = [Circle(0.0, 0.0, 0.0) for _ in range(count)]

    def pack_group(items: list[int]) -> float:
        if sort_keys is not None:
            items = sorted(items, key=lambda i: sort_keys[i])
        return pack_siblings([circles[i] for i in items])

    # Radii bottom-up; child centres are relative to the parent for now.
    for node in forest.postorder():
        if forest.is_leaf(node):
            circles[node].r = math.sqrt(weights[node])
        else:
            circles[node].r = pack_group(forest.children[node])

    outer = pack_group(forest.roots)

    # Relative centres to absolute, top-down.
    for node in forest.preorder():
        parent = forest.parents[node]
        if parent is not None:
            circles[node].x += circles[parent].x
            circles[node].y += circles[parent].y

    positions: list[RawPosition] = []
    for index, circle in enumerate(circles):
        attrs = base_attrs(forest, index)
        attrs.update({"r": circle.r, "weight": weights[index]})
        positions.append(RawPosition(index, circle.x, circle.y, attrs))
    return AlgorithmOutput(positions, {"radius": outer})


CIRCLEPACK = LayoutAlgorithm(
    name="circlepack",
    func=layout_circlepack,
    params=(WEIGHT_PARAM, Param("sort_by"), ROOT_PARAM),
    supports_circular=False,
)
