"""Layout algorithm contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from graphlayout.ir.graph import CanonicalGraph
from graphlayout.layout.params import Param
from graphlayout.layout.types import AlgorithmOutput


class LayoutFunc(Protocol):
    def __call__(self, canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
        """Place every node of ``canonical``; ``circular`` is only set when supported."""
        ...


@dataclass(frozen=True)
class LayoutAlgorithm:
    """A named layout strategy plus its declared parameters."""

    name: str
    func: LayoutFunc
    params: tuple[Param, ...] = ()
    supports_circular: bool = False

    def __call__(self, canonical: CanonicalGraph, params: dict[str, Any], circular: bool) -> AlgorithmOutput:
        return self.func(canonical, params, circular and self.supports_circular)
