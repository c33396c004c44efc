"""Space-filling hierarchical layouts: treemap, icicle, and sunburst.

Treemap:
  Each node owns a rectangle split among its children in proportion to
  subtree weight. ``squarify`` lays children (heaviest first) in rows along
  the shorter side, growing a row while its worst aspect ratio does not get
  worse. ``slice_dice`` alternates the split axis by depth.

Partition (icicle):
  Horizontal extent proportional to weight, one fixed-height band per depth.
  The circular variant (sunburst) maps extent to angle and depth to radius.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from graphlayout.ir.graph import CanonicalGraph, Forest
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.algorithms.hierarchy import ROOT_PARAM, WEIGHT_PARAM, base_attrs, forest_of, subtree_weights
from graphlayout.layout.params import Param
from graphlayout.layout.types import AlgorithmOutput, RawPosition
from graphlayout.types import Anchor, TreemapAlgorithm


@dataclass
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def area(self) -> float:
        return self.width * self.height


# ─── Splitting ───────────────────────────────────────────────────────────────


def _split(items: list[int], weights: list[float], rect: Rect, along_x: bool) -> dict[int, Rect]:
    """Cut ``rect`` into consecutive strips, one per item, sized by weight."""
    out: dict[int, Rect] = {}
    total = sum(weights[i] for i in items)
    start = rect.x0 if along_x else rect.y0
    end = rect.x1 if along_x else rect.y1
    span = end - start
    acc = 0.0
    for pos, item in enumerate(items):
        lo = start + (span * acc / total if total > 0 else 0.0)
        acc += weights[item]
        if pos == len(items) - 1 and total > 0:
            hi = end
        else:
            hi = start + (span * acc / total if total > 0 else 0.0)
        out[item] = Rect(lo, rect.y0, hi, rect.y1) if along_x else Rect(rect.x0, lo, rect.x1, hi)
    return out


def _worst_ratio(row_sum: float, row_min: float, row_max: float, alpha: float) -> float:
    beta = row_sum * row_sum * alpha
    if row_min <= 0 or beta <= 0:
        return math.inf
    return max(row_max / beta, beta / row_min)


def squarify(items: list[int], weights: list[float], rect: Rect) -> dict[int, Rect]:
    """Squarified treemap of ``items`` inside ``rect``.

    Items are taken heaviest first; ties keep their given order.
    """
    ordered = sorted(items, key=lambda i: -weights[i])
    value = sum(weights[i] for i in ordered)
    if value <= 0 or rect.width <= 0 or rect.height <= 0:
        return _split(ordered, weights, rect, along_x=rect.width >= rect.height)

    out: dict[int, Rect] = {}
    x0, y0, x1, y1 = rect.x0, rect.y0, rect.x1, rect.y1
    i0 = 0
    n = len(ordered)
    while i0 < n:
        dx, dy = x1 - x0, y1 - y0
        i1 = i0 + 1
        row_sum = weights[ordered[i0]]
        row_min = row_max = row_sum
        if value > 0 and dx > 0 and dy > 0:
            alpha = max(dy / dx, dx / dy) / value
            best = _worst_ratio(row_sum, row_min, row_max, alpha)
            while i1 < n:
                w = weights[ordered[i1]]
                ratio = _worst_ratio(row_sum + w, min(row_min, w), max(row_max, w), alpha)
                if ratio > best:
                    break
                row_sum += w
                row_min, row_max = min(row_min, w), max(row_max, w)
                best = ratio
                i1 += 1
        else:
            i1 = n
            row_sum = sum(weights[i] for i in ordered[i0:])

        row = ordered[i0:i1]
        # Sorted heaviest first, so only zero weights can follow a row that
        # ends on a zero; such a row closes off the rectangle.
        last_row = i1 == n or weights[ordered[i1]] == 0
        share = row_sum / value if value > 0 else 0.0
        if dx < dy:
            band_end = y1 if last_row else y0 + dy * share
            out.update(_split(row, weights, Rect(x0, y0, x1, band_end), along_x=True))
            y0 = band_end
        else:
            band_end = x1 if last_row else x0 + dx * share
            out.update(_split(row, weights, Rect(x0, y0, band_end, y1), along_x=False))
            x0 = band_end
        value -= row_sum
        i0 = i1
    return out


def treemap_rects(forest: Forest, weights: list[float], root_rect: Rect, algorithm: TreemapAlgorithm) -> list[Rect]:
    rects: list[Rect | None] = [None] * len(weights)

    def divide(items: list[int], rect: Rect, depth: int) -> None:
        if not items:
            return
        if algorithm is TreemapAlgorithm.SQUARIFY:
            parts = squarify(items, weights, rect)
        else:
            # children of even-depth parents split along x
            parts = _split(items, weights, rect, along_x=depth % 2 == 1)
        for item in items:
            rects[item] = parts[item]
            divide(forest.children[item], parts[item], depth + 1)

    divide(forest.roots, root_rect, 0)
    return [r for r in rects if r is not None]


def _anchor_point(rect: Rect, anchor: Anchor) -> tuple[float, float]:
    if anchor is Anchor.CORNER:
        return (rect.x0, rect.y0)
    return ((rect.x0 + rect.x1) / 2, (rect.y0 + rect.y1) / 2)


def _rect_attrs(rect: Rect) -> dict[str, Any]:
    return {"xmin": rect.x0, "ymin": rect.y0, "width": rect.width, "height": rect.height}


# ─── Treemap ─────────────────────────────────────────────────────────────────


def layout_treemap(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    forest = forest_of(canonical, params)
    weights = subtree_weights(canonical, forest, params["weight"])
    root_rect = Rect(0.0, 0.0, float(params["width"]), float(params["height"]))
    rects = treemap_rects(forest, weights, root_rect, TreemapAlgorithm(params["algorithm"]))
    anchor = Anchor(params["anchor"])

    positions: list[RawPosition] = []
    for index, rect in enumerate(rects):
        x, y = _anchor_point(rect, anchor)
        attrs = base_attrs(forest, index)
        attrs.update(_rect_attrs(rect))
        attrs["weight"] = weights[index]
        positions.append(RawPosition(index, x, y, attrs))
    return AlgorithmOutput(positions, {"bounds": (root_rect.x0, root_rect.y0, root_rect.x1, root_rect.y1)})


# ─── Partition (icicle / sunburst) ───────────────────────────────────────────


def icicle_rects(forest: Forest, weights: list[float], width: float, band: float) -> list[Rect]:
    rects: list[Rect | None] = [None] * len(weights)

    def divide(items: list[int], x0: float, x1: float) -> None:
        if not items:
            return
        depth = forest.depth[items[0]]
        parts = _split(items, weights, Rect(x0, depth * band, x1, (depth + 1) * band), along_x=True)
        for item in items:
            rects[item] = parts[item]
            divide(forest.children[item], parts[item].x0, parts[item].x1)

    divide(forest.roots, 0.0, width)
    return [r for r in rects if r is not None]


def layout_partition(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    forest = forest_of(canonical, params)
    weights = subtree_weights(canonical, forest, params["weight"])
    width = float(params["width"])
    band = float(params["height"])
    rects = icicle_rects(forest, weights, width, band)
    anchor = Anchor(params["anchor"])

    positions: list[RawPosition] = []
    for index, rect in enumerate(rects):
        attrs = base_attrs(forest, index)
        attrs["weight"] = weights[index]
        if circular:
            start = rect.x0 / width * 2 * math.pi if width > 0 else 0.0
            end = rect.x1 / width * 2 * math.pi if width > 0 else 0.0
            attrs.update({"start": start, "end": end, "r0": rect.y0, "r1": rect.y1})
            full_disc = forest.depth[index] == 0 and math.isclose(end - start, 2 * math.pi)
            radius = 0.0 if full_disc else (rect.y0 + rect.y1) / 2
            positions.append(RawPosition(index, (start + end) / 2, radius, attrs, polar=True))
        else:
            attrs.update(_rect_attrs(rect))
            x, y = _anchor_point(rect, anchor)
            positions.append(RawPosition(index, x, y, attrs))
    return AlgorithmOutput(positions, {"band_height": band})


_SHAPE_PARAMS = (
    WEIGHT_PARAM,
    Param("anchor", default=Anchor.CENTER.value, choices=tuple(a.value for a in Anchor)),
    Param("width", default=1.0, numeric=True, positive=True),
    Param("height", default=1.0, numeric=True, positive=True),
    ROOT_PARAM,
)

TREEMAP = LayoutAlgorithm(
    name="treemap",
    func=layout_treemap,
    params=_SHAPE_PARAMS
    + (
        Param(
            "algorithm",
            choices=tuple(a.value for a in TreemapAlgorithm),
            config_key="treemap_algorithm",
        ),
    ),
    supports_circular=False,
)

PARTITION = LayoutAlgorithm(
    name="partition",
    func=layout_partition,
    params=_SHAPE_PARAMS,
    supports_circular=True,
)
