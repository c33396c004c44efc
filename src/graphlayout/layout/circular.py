"""Polar to Cartesian projection for circular layouts."""

from __future__ import annotations

import math

from graphlayout.layout.types import NodePosition, RawPosition


def to_cartesian(angle: float, radius: float) -> tuple[float, float]:
    return (radius * math.cos(angle), radius * math.sin(angle))


def project(positions: list[RawPosition]) -> list[NodePosition]:
    """Convert raw algorithm output into node positions.

    Polar entries are projected; the assigned ``angle`` and ``radius`` are
    kept as node attributes so renderers can draw arcs. Cartesian entries pass
    through unchanged.
    """
    out: list[NodePosition] = []
    for raw in positions:
        if raw.polar:
            x, y = to_cartesian(raw.x, raw.y)
            attrs = dict(raw.attrs)
            attrs.setdefault("angle", raw.x)
            attrs.setdefault("radius", raw.y)
        else:
            x, y = raw.x, raw.y
            attrs = raw.attrs
        out.append(NodePosition(index=raw.index, x=float(x), y=float(y), attrs=attrs))
    return out
