"""Layout registry — adapters by graph kind and algorithms by (kind, name).

The registry is populated at import time and read by every ``compute`` call.
Writers take a lock and swap in fresh dictionaries, so readers never see a
half-updated table and late registration stays safe under threads.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from graphlayout.adapters.base import AutoPolicy, GraphAdapter
from graphlayout.errors import UnknownLayoutName, UnsupportedGraphType
from graphlayout.ir.graph import CanonicalGraph
from graphlayout.layout.algorithms.base import LayoutAlgorithm

logger = logging.getLogger(__name__)

AUTO = "auto"


@dataclass(frozen=True)
class AdapterEntry:
    kind: str
    adapter: GraphAdapter
    auto: AutoPolicy


class LayoutRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._adapters: dict[str, AdapterEntry] = {}
        self._kinds_by_type: dict[type, str] = {}
        self._algorithms: dict[tuple[str, str], LayoutAlgorithm] = {}

    # ─── Registration ────────────────────────────────────────────────────────

    def register_adapter(
        self,
        kind: str,
        adapter: GraphAdapter,
        auto: AutoPolicy,
        graph_types: tuple[type, ...] = (),
    ) -> None:
        """Register an adapter for ``kind`` together with its auto policy.

        ``graph_types`` lists the Python classes whose instances resolve to
        ``kind`` when the caller does not name a kind explicitly.
        """
        with self._lock:
            adapters = dict(self._adapters)
            adapters[kind] = AdapterEntry(kind=kind, adapter=adapter, auto=auto)
            kinds_by_type = dict(self._kinds_by_type)
            for graph_type in graph_types:
                kinds_by_type[graph_type] = kind
            self._adapters = adapters
            self._kinds_by_type = kinds_by_type
        logger.debug("registered adapter %s for kind %r", type(adapter).__name__, kind)

    def register_algorithm(self, kind: str, algorithm: LayoutAlgorithm, name: str | None = None) -> None:
        name = name or algorithm.name
        if name == AUTO:
            raise ValueError(f"'{AUTO}' is reserved for the kind's auto policy")
        with self._lock:
            if kind not in self._adapters:
                raise ValueError(f"no adapter registered for graph kind '{kind}'")
            algorithms = dict(self._algorithms)
            algorithms[(kind, name)] = algorithm
            self._algorithms = algorithms
        logger.debug("registered layout %r for kind %r", name, kind)

    # ─── Lookup ──────────────────────────────────────────────────────────────

    def kinds(self) -> list[str]:
        return sorted(self._adapters)

    def resolve_kind(self, graph: Any, kind: str | None = None) -> str:
        """Kind tag for ``graph``: the explicit tag, else the registered type."""
        adapters = self._adapters
        if kind is not None:
            if kind not in adapters:
                raise UnsupportedGraphType(f"no adapter registered for graph kind '{kind}'")
            return kind
        kinds_by_type = self._kinds_by_type
        for cls in type(graph).__mro__:
            if cls in kinds_by_type:
                return kinds_by_type[cls]
        raise UnsupportedGraphType(f"no adapter registered for graphs of type {type(graph).__name__}")

    def adapter(self, kind: str) -> GraphAdapter:
        entry = self._adapters.get(kind)
        if entry is None:
            raise UnsupportedGraphType(f"no adapter registered for graph kind '{kind}'")
        return entry.adapter

    def algorithm_names(self, kind: str) -> list[str]:
        return sorted(name for (k, name) in self._algorithms if k == kind)

    def algorithm(self, kind: str, name: str) -> LayoutAlgorithm:
        algorithm = self._algorithms.get((kind, name))
        if algorithm is None:
            raise UnknownLayoutName(name, kind, [AUTO] + self.algorithm_names(kind))
        return algorithm

    def auto_algorithm(self, kind: str, canonical: CanonicalGraph) -> LayoutAlgorithm:
        entry = self._adapters.get(kind)
        if entry is None:
            raise UnsupportedGraphType(f"no adapter registered for graph kind '{kind}'")
        name = entry.auto(canonical)
        logger.debug("auto layout for kind %r selected %r", kind, name)
        return self.algorithm(kind, name)


_default: LayoutRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> LayoutRegistry:
    """The process-wide registry, populated with the built-in adapters on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                from graphlayout.adapters import install

                registry = LayoutRegistry()
                install(registry)
                _default = registry
    return _default
