"""Parameter declarations and binding for layout algorithms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

from graphlayout.config import LayoutConfig
from graphlayout.errors import InvalidParam, InvalidWeightReference, MissingRequiredParam
from graphlayout.ir.graph import CanonicalGraph


@dataclass(frozen=True)
class Param:
    """One declared layout parameter.

    ``config_key`` names a :class:`LayoutConfig` field supplying the default.
    """

    name: str
    required: bool = False
    default: Any = None
    choices: tuple[str, ...] | None = None
    numeric: bool = False
    positive: bool = False
    config_key: str | None = None


def bind_params(declared: tuple[Param, ...], given: dict[str, Any], config: LayoutConfig) -> dict[str, Any]:
    """Validate caller parameters against a declaration and fill in defaults."""
    known = {p.name for p in declared}
    for name in given:
        if name not in known:
            accepted = ", ".join(sorted(known)) or "none"
            raise InvalidParam(name, f"not accepted by this layout (accepted: {accepted})")

    bound: dict[str, Any] = {}
    for param in declared:
        value = given.get(param.name)
        if value is None:
            if param.required:
                raise MissingRequiredParam(param.name, "is required")
            value = getattr(config, param.config_key) if param.config_key else param.default
        if value is not None and param.choices is not None and value not in param.choices:
            raise InvalidParam(param.name, f"must be one of {', '.join(param.choices)}, got {value!r}")
        if value is not None and param.numeric and not is_number(value):
            raise InvalidParam(param.name, f"must be a number, got {value!r}")
        if value is not None and param.positive and value <= 0:
            raise InvalidParam(param.name, f"must be positive, got {value!r}")
        bound[param.name] = value
    return bound


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def node_values(
    canonical: CanonicalGraph,
    attr: str,
    param: str,
    *,
    nonnegative: bool = False,
    indices: list[int] | None = None,
) -> dict[int, float]:
    """Read a numeric node attribute for the given nodes (all nodes by default).

    Raises InvalidWeightReference when a node lacks the attribute, or its value
    is not a finite number, or (with ``nonnegative``) is negative.
    """
    if indices is None:
        indices = list(range(canonical.node_count()))
    values: dict[int, float] = {}
    for index in indices:
        try:
            raw = canonical.node_attr(index, attr)
        except KeyError:
            raise InvalidWeightReference(param, f"node {index} has no attribute '{attr}'") from None
        if not is_number(raw):
            raise InvalidWeightReference(param, f"attribute '{attr}' of node {index} is not numeric: {raw!r}")
        if nonnegative and raw < 0:
            raise InvalidWeightReference(param, f"attribute '{attr}' of node {index} is negative: {raw!r}")
        values[index] = float(raw)
    return values
