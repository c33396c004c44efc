"""Adapter for :class:`TreeNode` hierarchies (kind ``"hierarchy"``)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from graphlayout.adapters.base import edge_records
from graphlayout.errors import AdapterContractViolation
from graphlayout.ir.graph import CanonicalGraph, EdgeData, NodeData
from graphlayout.ir.tree import TreeNode
from graphlayout.layout.params import is_number
from graphlayout.layout.types import EdgeRecord

logger = logging.getLogger(__name__)


class HierarchyAdapter:
    """Flattens a tree in pre-order; edges run parent to child.

    Connection queries are not supported for hierarchies.
    """

    kind = "hierarchy"

    def convert(self, graph: Any, params: dict[str, Any]) -> CanonicalGraph:
        if isinstance(graph, Mapping):
            graph = TreeNode.from_nested(graph)
        if not isinstance(graph, TreeNode):
            raise AdapterContractViolation(f"expected a TreeNode hierarchy, got {type(graph).__name__}")

        nodes: list[NodeData] = []
        edges: list[EdgeData] = []
        parents: list[int | None] = []
        seen: set[int] = set()

        stack: list[tuple[TreeNode, int | None]] = [(graph, None)]
        while stack:
            tree_node, parent = stack.pop()
            if not isinstance(tree_node, TreeNode):
                raise AdapterContractViolation(f"child of node {parent} is not a TreeNode: {tree_node!r}")
            if id(tree_node) in seen:
                raise AdapterContractViolation(f"node {tree_node.name!r} appears twice; a hierarchy must be a tree")
            seen.add(id(tree_node))

            index = len(nodes)
            attrs = dict(tree_node.attrs)
            if tree_node.height is not None:
                attrs["height"] = tree_node.height
            if tree_node.weight is not None:
                attrs["weight"] = tree_node.weight
            nodes.append(
                NodeData(
                    index=index,
                    name=tree_node.name,
                    weight=float(tree_node.weight) if is_number(tree_node.weight) else None,
                    attrs=attrs,
                )
            )
            parents.append(parent)
            if parent is not None:
                edges.append(EdgeData(from_index=parent, to_index=index))
            stack.extend((child, index) for child in reversed(tree_node.children))

        logger.debug("converted hierarchy: %d nodes", len(nodes))
        return CanonicalGraph.build(nodes, edges, directed=True, parents=parents)

    def edges(self, canonical: CanonicalGraph, circular: bool) -> list[EdgeRecord]:
        return edge_records(canonical, circular)

    def connect(
        self,
        canonical: CanonicalGraph,
        from_index: int,
        to_index: int,
        weight: str | None = None,
    ) -> list[int] | None:
        return None


def auto_layout(canonical: CanonicalGraph) -> str:
    """Hierarchies are always drawn as dendrograms."""
    return "dendrogram"
