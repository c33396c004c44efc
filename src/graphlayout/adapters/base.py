"""Base adapter protocol."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from graphlayout.ir.graph import CanonicalGraph
from graphlayout.layout.types import EdgeRecord


class GraphAdapter(Protocol):
    """Protocol that every supported graph representation implements."""

    kind: str

    def convert(self, graph: Any, params: dict[str, Any]) -> CanonicalGraph:
        """Normalize ``graph``; identical input must give identical output."""
        ...

    def edges(self, canonical: CanonicalGraph, circular: bool) -> list[EdgeRecord]:
        """Every edge, multiplicity preserved, stamped with ``circular``."""
        ...

    def connect(
        self,
        canonical: CanonicalGraph,
        from_index: int,
        to_index: int,
        weight: str | None = None,
    ) -> list[int] | None:
        """Node indices of a path between two nodes; None when unsupported."""
        ...


AutoPolicy = Callable[[CanonicalGraph], str]


def edge_records(canonical: CanonicalGraph, circular: bool) -> list[EdgeRecord]:
    """Edge records straight from the canonical edge list."""
    return [
        EdgeRecord(
            from_index=edge.from_index,
            to_index=edge.to_index,
            circular=circular,
            key=edge.key,
            attrs=dict(edge.attrs),
        )
        for edge in canonical.edges()
    ]
