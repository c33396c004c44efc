"""Dendrogram and tidy-tree layouts.

Both place leaves at consecutive integer x positions in pre-order and centre
each internal node over the mean of its children. The dendrogram puts nodes
at their merge height; the tree puts them at their depth. Circular variants
keep the root at the centre and spread leaves around the rim.
"""

from __future__ import annotations

import math
from typing import Any

from graphlayout.errors import InvalidWeightReference
from graphlayout.ir.graph import CanonicalGraph, Forest
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.algorithms.hierarchy import ROOT_PARAM, base_attrs, forest_of
from graphlayout.layout.params import Param, node_values
from graphlayout.layout.types import AlgorithmOutput, RawPosition

HEIGHT_ATTR = "height"


def leaf_order_x(forest: Forest) -> list[float]:
    """Leaves at 0, 1, 2, ... in pre-order; parents at the mean of their children."""
    xs = [0.0] * len(forest.parents)
    for position, leaf in enumerate(forest.leaves()):
        xs[leaf] = float(position)
    for node in forest.postorder():
        kids = forest.children[node]
        if kids:
            xs[node] = sum(xs[c] for c in kids) / len(kids)
    return xs


def derived_heights(forest: Forest) -> list[float]:
    """Distance to the farthest descendant leaf; leaves are 0."""
    heights = [0.0] * len(forest.parents)
    for node in forest.postorder():
        kids = forest.children[node]
        if kids:
            heights[node] = 1.0 + max(heights[c] for c in kids)
    return heights


def _has_height_attr(canonical: CanonicalGraph, forest: Forest, attr: str) -> bool:
    internal = [i for i in range(canonical.node_count()) if not forest.is_leaf(i)]
    if not internal:
        return False
    for index in internal:
        try:
            canonical.node_attr(index, attr)
        except KeyError:
            return False
    return True


def explicit_heights(canonical: CanonicalGraph, forest: Forest, attr: str) -> list[float]:
    """Heights read from a node attribute; leaves without one sit at 0."""
    count = canonical.node_count()
    internal = [i for i in range(count) if not forest.is_leaf(i)]
    values = node_values(canonical, attr, "height", nonnegative=True, indices=internal)
    for leaf in forest.leaves():
        try:
            canonical.node_attr(leaf, attr)
        except KeyError:
            values[leaf] = 0.0
        else:
            values.update(node_values(canonical, attr, "height", nonnegative=True, indices=[leaf]))

    for child, parent in enumerate(forest.parents):
        if parent is not None and values[parent] < values[child]:
            raise InvalidWeightReference(
                "height",
                f"node {parent} has height {values[parent]} below its child {child} ({values[child]})",
            )
    return [values[i] for i in range(count)]


def layout_dendrogram(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    forest = forest_of(canonical, params)
    xs = leaf_order_x(forest)

    attr = params["height"]
    if attr is None and _has_height_attr(canonical, forest, HEIGHT_ATTR):
        attr = HEIGHT_ATTR
    heights = explicit_heights(canonical, forest, attr) if attr is not None else derived_heights(forest)

    top = max(heights, default=0.0)
    n_leaves = len(forest.leaves())
    positions: list[RawPosition] = []
    for index in range(canonical.node_count()):
        attrs = base_attrs(forest, index)
        attrs["height"] = heights[index]
        if circular:
            angle = xs[index] / n_leaves * 2 * math.pi
            positions.append(RawPosition(index, angle, top - heights[index], attrs, polar=True))
        else:
            positions.append(RawPosition(index, xs[index], heights[index], attrs))

    metadata = {
        "heights": dict(enumerate(heights)),
        "height_source": "attribute" if attr is not None else "derived",
    }
    return AlgorithmOutput(positions, metadata)


def layout_tree(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    forest = forest_of(canonical, params)
    xs = leaf_order_x(forest)
    n_leaves = len(forest.leaves())

    positions: list[RawPosition] = []
    for index in range(canonical.node_count()):
        attrs = base_attrs(forest, index)
        depth = forest.depth[index]
        if circular:
            angle = xs[index] / n_leaves * 2 * math.pi
            positions.append(RawPosition(index, angle, float(depth), attrs, polar=True))
        else:
            positions.append(RawPosition(index, xs[index], -float(depth), attrs))
    return AlgorithmOutput(positions, {"max_depth": max(forest.depth, default=0)})


DENDROGRAM = LayoutAlgorithm(
    name="dendrogram",
    func=layout_dendrogram,
    params=(Param("height"), ROOT_PARAM),
    supports_circular=True,
)

TREE = LayoutAlgorithm(
    name="tree",
    func=layout_tree,
    params=(ROOT_PARAM,),
    supports_circular=True,
)
