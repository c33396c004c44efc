"""Built-in adapters and their registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphlayout.adapters import hierarchy, nxgraph
from graphlayout.adapters.base import AutoPolicy, GraphAdapter
from graphlayout.adapters.hierarchy import HierarchyAdapter
from graphlayout.adapters.nxgraph import NetworkXAdapter
from graphlayout.ir.tree import TreeNode
from graphlayout.layout.algorithms import FR, HIERARCHICAL, HIVE, LINEAR

if TYPE_CHECKING:
    from graphlayout.layout.registry import LayoutRegistry

__all__ = [
    "AutoPolicy",
    "GraphAdapter",
    "HierarchyAdapter",
    "NetworkXAdapter",
    "install",
]


def install(registry: LayoutRegistry) -> None:
    """Register the built-in adapters and layouts on ``registry``."""
    registry.register_adapter(
        NetworkXAdapter.kind,
        NetworkXAdapter(),
        auto=nxgraph.auto_layout,
        graph_types=nxgraph.GRAPH_TYPES,
    )
    for algorithm in (LINEAR, *HIERARCHICAL, HIVE, FR):
        registry.register_algorithm(NetworkXAdapter.kind, algorithm)

    registry.register_adapter(
        HierarchyAdapter.kind,
        HierarchyAdapter(),
        auto=hierarchy.auto_layout,
        graph_types=(TreeNode,),
    )
    for algorithm in (LINEAR, *HIERARCHICAL):
        registry.register_algorithm(HierarchyAdapter.kind, algorithm)
