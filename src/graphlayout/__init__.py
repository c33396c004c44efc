"""graphlayout: deterministic node layouts for graphs, trees and hierarchies."""

from graphlayout.adapters.base import AutoPolicy, GraphAdapter
from graphlayout.config import LayoutConfig
from graphlayout.errors import (
    AdapterContractViolation,
    GraphShapeError,
    InvalidParam,
    InvalidWeightReference,
    LayoutError,
    LayoutExecutionError,
    MissingRequiredParam,
    UnknownLayoutName,
    UnsupportedGraphType,
)
from graphlayout.ir import CanonicalGraph, TreeNode
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.edges import resolve_edges, resolve_path, resolve_paths
from graphlayout.layout.engine import LayoutEngine, compute
from graphlayout.layout.params import Param
from graphlayout.layout.registry import LayoutRegistry, default_registry
from graphlayout.layout.types import ConnectionPath, EdgeRecord, LayoutResult, NodePosition
from graphlayout.types import Stage

__all__ = [
    "AdapterContractViolation",
    "AutoPolicy",
    "CanonicalGraph",
    "ConnectionPath",
    "EdgeRecord",
    "GraphAdapter",
    "GraphShapeError",
    "InvalidParam",
    "InvalidWeightReference",
    "LayoutAlgorithm",
    "LayoutConfig",
    "LayoutEngine",
    "LayoutError",
    "LayoutExecutionError",
    "LayoutRegistry",
    "LayoutResult",
    "MissingRequiredParam",
    "NodePosition",
    "Param",
    "Stage",
    "TreeNode",
    "UnknownLayoutName",
    "UnsupportedGraphType",
    "compute",
    "default_registry",
    "register_adapter",
    "register_algorithm",
    "resolve_edges",
    "resolve_path",
    "resolve_paths",
]


def register_adapter(
    kind: str,
    adapter: GraphAdapter,
    auto: AutoPolicy,
    graph_types: tuple[type, ...] = (),
) -> None:
    """Add support for a new graph kind to the process-wide registry.

    Call during start-up, before layouts are computed.
    """
    default_registry().register_adapter(kind, adapter, auto, graph_types)


def register_algorithm(kind: str, name: str, algorithm: LayoutAlgorithm) -> None:
    """Add a layout for ``kind`` to the process-wide registry under ``name``."""
    default_registry().register_algorithm(kind, algorithm, name)
