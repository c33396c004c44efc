"""Helpers shared by the hierarchical layouts."""

from __future__ import annotations

from typing import Any

from graphlayout.errors import InvalidParam
from graphlayout.ir.graph import CanonicalGraph, Forest
from graphlayout.layout.params import Param, node_values

ROOT_PARAM = Param("root", numeric=True)
WEIGHT_PARAM = Param("weight")


def forest_of(canonical: CanonicalGraph, params: dict[str, Any]) -> Forest:
    """Forest view for a hierarchical layout.

    ``root`` orients an undirected graph. Directed graphs and hierarchies
    carry their own roots, so there it must name one of them.
    """
    root = params.get("root")
    root = int(root) if root is not None else None
    forest = canonical.forest(root)
    oriented = canonical.directed or canonical.parents is not None
    if root is not None and oriented and root not in forest.roots:
        raise InvalidParam("root", f"node {root} is not a root of this graph (roots: {forest.roots})")
    return forest


def subtree_weights(canonical: CanonicalGraph, forest: Forest, weight: str | None) -> list[float]:
    """Weight of every subtree: leaf weights (1 when unweighted) summed upwards."""
    totals = [0.0] * canonical.node_count()
    leaves = forest.leaves()
    if weight is None:
        leaf_weights = {i: 1.0 for i in leaves}
    else:
        leaf_weights = node_values(canonical, weight, "weight", nonnegative=True, indices=leaves)
    for node in forest.postorder():
        if forest.is_leaf(node):
            totals[node] = leaf_weights[node]
        else:
            totals[node] = sum(totals[c] for c in forest.children[node])
    return totals


def base_attrs(forest: Forest, index: int) -> dict[str, Any]:
    return {"depth": forest.depth[index], "leaf": forest.is_leaf(index)}
