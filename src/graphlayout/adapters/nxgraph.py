"""Adapter for networkx graphs (kind ``"graph"``).

Node order follows ``graph.nodes`` insertion order. Multigraph keys,
parallel edges and self-loops all survive conversion.
"""

from __future__ import annotations

import logging
from typing import Any

import networkx as nx

from graphlayout.adapters.base import edge_records
from graphlayout.errors import AdapterContractViolation, InvalidWeightReference
from graphlayout.ir.graph import CanonicalGraph, EdgeData, NodeData
from graphlayout.layout.params import is_number
from graphlayout.layout.types import EdgeRecord
from graphlayout.types import Stage

logger = logging.getLogger(__name__)

GRAPH_TYPES: tuple[type, ...] = (nx.Graph, nx.DiGraph, nx.MultiGraph, nx.MultiDiGraph)


class NetworkXAdapter:
    kind = "graph"

    def convert(self, graph: Any, params: dict[str, Any]) -> CanonicalGraph:
        if not isinstance(graph, nx.Graph):
            raise AdapterContractViolation(f"expected a networkx graph, got {type(graph).__name__}")

        index_of: dict[Any, int] = {}
        nodes: list[NodeData] = []
        for position, (name, attrs) in enumerate(graph.nodes(data=True)):
            index_of[name] = position
            weight = attrs.get("weight")
            nodes.append(
                NodeData(
                    index=position,
                    name=name,
                    weight=float(weight) if is_number(weight) else None,
                    attrs=dict(attrs),
                )
            )

        edges: list[EdgeData] = []
        if graph.is_multigraph():
            edge_iter = ((u, v, attrs) for u, v, _key, attrs in graph.edges(keys=True, data=True))
        else:
            edge_iter = graph.edges(data=True)
        for u, v, attrs in edge_iter:
            if u not in index_of or v not in index_of:
                raise AdapterContractViolation(f"edge {u!r} -> {v!r} references a node that is not in the graph")
            weight = attrs.get("weight")
            edges.append(
                EdgeData(
                    from_index=index_of[u],
                    to_index=index_of[v],
                    weight=float(weight) if is_number(weight) else None,
                    attrs=dict(attrs),
                )
            )

        logger.debug("converted networkx graph: %d nodes, %d edges", len(nodes), len(edges))
        return CanonicalGraph.build(nodes, edges, directed=graph.is_directed())

    def edges(self, canonical: CanonicalGraph, circular: bool) -> list[EdgeRecord]:
        return edge_records(canonical, circular)

    def connect(
        self,
        canonical: CanonicalGraph,
        from_index: int,
        to_index: int,
        weight: str | None = None,
    ) -> list[int] | None:
        """Shortest path over the undirected view; empty when unreachable."""
        count = canonical.node_count()
        for end in (from_index, to_index):
            if not 0 <= end < count:
                raise AdapterContractViolation(f"node index {end} outside 0..{count - 1}", stage=Stage.DERIVATION)

        view = canonical.multigraph.to_undirected(as_view=True)
        weight_fn = _edge_weight(weight) if weight is not None else None
        try:
            return nx.shortest_path(view, from_index, to_index, weight=weight_fn)
        except nx.NetworkXNoPath:
            return []


def _edge_weight(attr: str):
    def weight(u: int, v: int, parallel: dict[int, dict[str, Any]]) -> float:
        values = []
        for edge_attrs in parallel.values():
            attrs = edge_attrs["data"].attrs
            if attr not in attrs:
                raise InvalidWeightReference(
                    "weight", f"edge {u} -> {v} has no attribute '{attr}'", stage=Stage.DERIVATION
                )
            value = attrs[attr]
            if not is_number(value) or value < 0:
                raise InvalidWeightReference("weight", f"edge {u} -> {v} has weight {value!r}", stage=Stage.DERIVATION)
            values.append(float(value))
        return min(values)

    return weight


def auto_layout(canonical: CanonicalGraph) -> str:
    """Trees and forests get the tidy tree layout; everything else is force-directed."""
    return "tree" if canonical.is_forest() else "fr"
