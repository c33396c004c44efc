"""Layout types shared across algorithms, the engine, and resolvers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from graphlayout.ir.graph import CanonicalGraph


@dataclass
class RawPosition:
    """An algorithm's output for one node.

    With ``polar`` set, ``x`` holds the angle and ``y`` the radius; the
    circular projector converts those before they reach a result.
    """

    index: int
    x: float
    y: float
    attrs: dict[str, Any] = field(default_factory=dict)
    polar: bool = False


@dataclass
class AlgorithmOutput:
    positions: list[RawPosition]
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class NodePosition:
    """A positioned node in the layout."""

    index: int
    x: float
    y: float
    attrs: dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeRecord:
    """An edge between two laid-out nodes, with its end-point geometry."""

    from_index: int
    to_index: int
    circular: bool
    key: int = 0
    x: float = 0.0
    y: float = 0.0
    xend: float = 0.0
    yend: float = 0.0
    attrs: dict[str, Any] = field(default_factory=dict)


ConnectionPath = list[int]


@dataclass
class LayoutResult:
    """Self-contained layout output — everything renderers need."""

    nodes: list[NodePosition]
    graph: Any
    kind: str
    algorithm: str
    circular: bool
    canonical: CanonicalGraph
    metadata: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[NodePosition]:
        return iter(self.nodes)

    def positions(self) -> dict[int, tuple[float, float]]:
        return {n.index: (n.x, n.y) for n in self.nodes}

    def to_records(self) -> list[dict[str, Any]]:
        """The node table: one dict per node with index, x, y, circular and attributes.

        Layout attributes come first; source node attributes fill in the
        remaining columns.
        """
        records: list[dict[str, Any]] = []
        for node in self.nodes:
            source = self.canonical.node(node.index)
            row: dict[str, Any] = {
                "index": node.index,
                "name": source.name,
                "x": node.x,
                "y": node.y,
                "circular": self.circular,
            }
            for key, value in node.attrs.items():
                row.setdefault(key, value)
            for key, value in source.attrs.items():
                row.setdefault(key, value)
            records.append(row)
        return records
