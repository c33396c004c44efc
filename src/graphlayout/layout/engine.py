"""Layout engine — resolves adapter and algorithm, runs the layout, assembles the result."""

from __future__ import annotations

import logging
import math
from typing import Any

from graphlayout.config import LayoutConfig
from graphlayout.errors import LayoutError, LayoutExecutionError
from graphlayout.layout.algorithms.base import LayoutAlgorithm
from graphlayout.layout.circular import project
from graphlayout.layout.params import bind_params
from graphlayout.layout.registry import AUTO, LayoutRegistry, default_registry
from graphlayout.layout.types import LayoutResult, NodePosition, RawPosition

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Computes layouts against a registry.

    Holds no per-call state, so one engine may serve concurrent callers.
    """

    def __init__(self, registry: LayoutRegistry | None = None, config: LayoutConfig | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.config = config if config is not None else LayoutConfig()

    def compute(
        self,
        graph: Any,
        layout: str | None = None,
        circular: bool = False,
        kind: str | None = None,
        **params: Any,
    ) -> LayoutResult:
        """Lay out ``graph`` with the named layout.

        Args:
            graph: Any graph an adapter is registered for.
            layout: Layout name; None or "auto" applies the graph kind's auto policy.
            circular: Request the circular variant. Ignored (result flag False)
                when the layout has none.
            kind: Explicit graph kind tag; by default resolved from the graph's type.
            **params: Layout parameters, validated against the layout's declaration.

        Returns:
            A LayoutResult with exactly one position per node, in node order.

        Raises:
            LayoutError: Subclass naming the failing stage; no partial result.
        """
        kind = self.registry.resolve_kind(graph, kind)
        adapter = self.registry.adapter(kind)
        canonical = adapter.convert(graph, params)
        logger.debug("kind %r: %d nodes, %d edges", kind, canonical.node_count(), canonical.edge_count())

        name = layout if layout is not None else self.config.default_layout
        if name == AUTO:
            algorithm = self.registry.auto_algorithm(kind, canonical)
        else:
            algorithm = self.registry.algorithm(kind, name)

        bound = bind_params(algorithm.params, params, self.config)
        use_circular = bool(circular) and algorithm.supports_circular
        if circular and not use_circular:
            logger.debug("layout %r has no circular variant; computing the linear form", algorithm.name)

        output = algorithm(canonical, bound, use_circular)
        nodes = _assemble(algorithm, output.positions, canonical.node_count())

        return LayoutResult(
            nodes=nodes,
            graph=graph,
            kind=kind,
            algorithm=algorithm.name,
            circular=use_circular,
            canonical=canonical,
            metadata=output.metadata,
        )


def _assemble(algorithm: LayoutAlgorithm, raw: list[RawPosition], count: int) -> list[NodePosition]:
    """Project, order by index, and check one finite position per node."""
    by_index: dict[int, RawPosition] = {}
    for position in raw:
        if position.index in by_index:
            raise LayoutExecutionError(f"layout '{algorithm.name}' placed node {position.index} twice")
        by_index[position.index] = position
    if set(by_index) != set(range(count)):
        raise LayoutExecutionError(f"layout '{algorithm.name}' placed {len(by_index)} of {count} nodes")

    nodes = project([by_index[i] for i in range(count)])
    for node in nodes:
        if not (math.isfinite(node.x) and math.isfinite(node.y)):
            raise LayoutExecutionError(f"layout '{algorithm.name}' gave node {node.index} a non-finite position")
    return nodes


_engine: LayoutEngine | None = None


def compute(
    graph: Any,
    layout: str | None = None,
    circular: bool = False,
    kind: str | None = None,
    **params: Any,
) -> LayoutResult:
    """Compute a layout with the default engine; see :meth:`LayoutEngine.compute`."""
    global _engine
    if _engine is None:
        _engine = LayoutEngine()
    try:
        return _engine.compute(graph, layout, circular, kind, **params)
    except LayoutError as e:
        logger.debug("layout failed: %s", e)
        raise
