"""Hive plot layout: nodes on radial axes chosen by a categorical attribute."""

from __future__ import annotations

import math
from typing import Any

from graphlayout.errors import InvalidParam, MissingRequiredParam
from graphlayout.ir.graph import CanonicalGraph
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.params import Param, node_values
from graphlayout.layout.types import AlgorithmOutput, RawPosition


def _axis_values(canonical: CanonicalGraph, attr: str) -> list[Any]:
    values: list[Any] = []
    for index in range(canonical.node_count()):
        try:
            value = canonical.node_attr(index, attr)
        except KeyError:
            raise MissingRequiredParam("axis", f"node {index} has no axis attribute '{attr}'") from None
        try:
            hash(value)
        except TypeError:
            raise InvalidParam("axis", f"axis value of node {index} is not hashable: {value!r}") from None
        values.append(value)
    return values


def _axis_order(values: list[Any], requested: list[Any] | None) -> list[Any]:
    seen: list[Any] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    if requested is None:
        return seen
    missing = [v for v in seen if v not in requested]
    if missing:
        raise InvalidParam("axis_order", f"does not list axis values {missing!r}")
    return [v for v in requested if v in seen]


def _sort_keys(canonical: CanonicalGraph, sort_by: str | None) -> dict[int, float]:
    count = canonical.node_count()
    if sort_by is None:
        return {i: float(i) for i in range(count)}
    if sort_by == "degree":
        return {i: float(canonical.degree(i)) for i in range(count)}
    return node_values(canonical, sort_by, "sort_by")


def layout_hive(canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
    values = _axis_values(canonical, params["axis"])
    axes = _axis_order(values, params["axis_order"])
    keys = _sort_keys(canonical, params["sort_by"])
    use_numeric = bool(params["use_numeric"])
    normalize = bool(params["normalize"])
    center = float(params["center_size"])
    offset = float(params["offset"])

    angles = {axis: offset + k * 2 * math.pi / len(axes) for k, axis in enumerate(axes)}
    radii: dict[int, float] = {}
    for axis in axes:
        members = sorted((i for i, v in enumerate(values) if v == axis), key=lambda i: keys[i])
        if use_numeric:
            raw = {i: keys[i] for i in members}
        else:
            raw = {i: float(rank) for rank, i in enumerate(members)}
        if normalize:
            lo = min(raw.values())
            hi = max(raw.values())
            span = hi - lo
            for i, r in raw.items():
                frac = (r - lo) / span if span > 0 else 0.0
                raw[i] = center + (1 - center) * frac
        radii.update(raw)

    positions: list[RawPosition] = []
    for index, axis in enumerate(values):
        angle = angles[axis]
        radius = radii[index]
        x = radius * math.cos(angle)
        y = radius * math.sin(angle)
        positions.append(RawPosition(index, x, y, {"axis": axis, "angle": angle, "radius": radius}))
    return AlgorithmOutput(positions, {"axes": angles})


HIVE = LayoutAlgorithm(
    name="hive",
    func=layout_hive,
    params=(
        Param("axis", required=True),
        Param("axis_order"),
        Param("sort_by"),
        Param("use_numeric", default=False),
        Param("normalize", default=True),
        Param("center_size", numeric=True, config_key="hive_center_size"),
        Param("offset", numeric=True, config_key="hive_offset"),
    ),
    supports_circular=False,
)
