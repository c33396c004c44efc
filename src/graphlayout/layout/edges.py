"""Edge and connection geometry derived from a finished layout."""

from __future__ import annotations

import logging

from graphlayout.errors import AdapterContractViolation
from graphlayout.layout.registry import LayoutRegistry, default_registry
from graphlayout.layout.types import ConnectionPath, EdgeRecord, LayoutResult
from graphlayout.types import Stage

logger = logging.getLogger(__name__)


def resolve_edges(result: LayoutResult, registry: LayoutRegistry | None = None) -> list[EdgeRecord]:
    """Every edge of the laid-out graph with its end-point coordinates.

    Each record carries the result's ``circular`` flag.
    """
    registry = registry if registry is not None else default_registry()
    adapter = registry.adapter(result.kind)
    records = adapter.edges(result.canonical, result.circular)

    positions = result.positions()
    for record in records:
        if record.from_index not in positions or record.to_index not in positions:
            raise AdapterContractViolation(
                f"edge {record.from_index} -> {record.to_index} references a node outside the layout",
                stage=Stage.DERIVATION,
            )
        record.circular = result.circular
        record.x, record.y = positions[record.from_index]
        record.xend, record.yend = positions[record.to_index]
    return records


def resolve_path(
    result: LayoutResult,
    from_index: int,
    to_index: int,
    weight: str | None = None,
    registry: LayoutRegistry | None = None,
) -> ConnectionPath:
    """Node indices along a path between two nodes.

    Returns an empty list when no path exists or the graph kind does not
    support connection queries.
    """
    registry = registry if registry is not None else default_registry()
    adapter = registry.adapter(result.kind)
    connect = getattr(adapter, "connect", None)
    if connect is None:
        logger.debug("adapter for kind %r has no connection support", result.kind)
        return []
    path = connect(result.canonical, from_index, to_index, weight)
    if path is None:
        logger.debug("adapter for kind %r does not support connections", result.kind)
        return []
    return list(path)


def resolve_paths(
    result: LayoutResult,
    pairs: list[tuple[int, int]],
    weight: str | None = None,
    registry: LayoutRegistry | None = None,
) -> list[ConnectionPath]:
    """One path per (from, to) pair, in order."""
    return [resolve_path(result, a, b, weight, registry) for a, b in pairs]
