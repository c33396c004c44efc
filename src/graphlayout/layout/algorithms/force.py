"""Force-directed layout (Fruchterman-Reingold via networkx)."""

from __future__ import annotations

import math
from typing import Any

import networkx as nx

from graphlayout.errors import InvalidWeightReference
from graphlayout.ir.graph import CanonicalGraph
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.params import Param, is_number
from graphlayout.layout.types import AlgorithmOutput, RawPosition


def _initial_positions(count: int) -> dict[int, tuple[float, float]]:
    return {i: (math.cos(2 * math.pi * i / count), math.sin(2 * math.pi * i / count)) for i in range(count)}


def layout_fr(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    count = canonical.node_count()
    max_iter = int(params["max_iter"])
    weight = params["weight"]

    simple: nx.Graph = nx.Graph()
    simple.add_nodes_from(range(count))
    for edge in canonical.edges():
        if edge.from_index == edge.to_index:
            continue
        if weight is None:
            w = 1.0
        elif weight in edge.attrs:
            w = edge.attrs[weight]
        else:
            raise InvalidWeightReference(
                "weight", f"edge {edge.from_index} -> {edge.to_index} has no attribute '{weight}'"
            )
        if not is_number(w) or w < 0:
            raise InvalidWeightReference("weight", f"edge {edge.from_index} -> {edge.to_index} has weight {w!r}")
        if simple.has_edge(edge.from_index, edge.to_index):
            simple[edge.from_index][edge.to_index]["weight"] += w
        else:
            simple.add_edge(edge.from_index, edge.to_index, weight=w)

    if count == 0:
        pos: dict[int, Any] = {}
    elif count == 1:
        pos = {0: (0.0, 0.0)}
    else:
        pos = nx.spring_layout(
            simple,
            pos=_initial_positions(count),
            iterations=max_iter,
            weight="weight",
            seed=int(params["seed"]),
        )

    positions = [RawPosition(i, float(pos[i][0]), float(pos[i][1])) for i in range(count)]
    return AlgorithmOutput(positions, {"iterations": max_iter})


FR = LayoutAlgorithm(
    name="fr",
    func=layout_fr,
    params=(
        Param("max_iter", numeric=True, config_key="force_max_iter"),
        Param("seed", numeric=True, config_key="seed"),
        Param("weight"),
    ),
    supports_circular=False,
)
