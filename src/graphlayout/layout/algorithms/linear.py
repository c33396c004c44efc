"""Linear layout: nodes on a line, or evenly around the unit circle."""

from __future__ import annotations

import math
from typing import Any

from graphlayout.ir.graph import CanonicalGraph
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.params import Param, node_values
from graphlayout.layout.types import AlgorithmOutput, RawPosition


def linear_ranks(canonical: CanonicalGraph, sort_by: str | None) -> list[int]:
    """Rank of each node; a stable sort keeps index order among ties."""
    count = canonical.node_count()
    if sort_by is None:
        return list(range(count))
    if sort_by == "degree":
        keys = {i: float(canonical.degree(i)) for i in range(count)}
    else:
        keys = node_values(canonical, sort_by, "sort_by")
    order = sorted(range(count), key=lambda i: keys[i])
    ranks = [0] * count
    for rank, index in enumerate(order):
        ranks[index] = rank
    return ranks


def layout_linear(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    ranks = linear_ranks(canonical, params["sort_by"])
    count = len(ranks)
    positions: list[RawPosition] = []
    for index, rank in enumerate(ranks):
        if circular:
            angle = rank / count * 2 * math.pi
            positions.append(RawPosition(index, angle, 1.0, {"rank": rank}, polar=True))
        else:
            positions.append(RawPosition(index, float(rank), 0.0, {"rank": rank}))
    return AlgorithmOutput(positions)


LINEAR = LayoutAlgorithm(
    name="linear",
    func=layout_linear,
    params=(Param("sort_by"),),
    supports_circular=True,
)
