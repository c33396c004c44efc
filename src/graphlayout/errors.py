"""Error taxonomy for layout computation.

Every fatal error is a ``ValueError`` carrying the pipeline :class:`Stage`
that raised it, so callers can tell a bad graph from a bad layout name or a
bad parameter without parsing messages.
"""

from __future__ import annotations

from graphlayout.types import Stage


class LayoutError(ValueError):
    """Base class for all layout failures."""

    stage: Stage = Stage.ALGORITHM_EXECUTION

    def __init__(self, message: str, *, stage: Stage | None = None) -> None:
        if stage is not None:
            self.stage = stage
        super().__init__(f"[{self.stage.value}] {message}")


class UnsupportedGraphType(LayoutError):
    stage = Stage.ADAPTER_RESOLUTION


class AdapterContractViolation(LayoutError):
    """The graph is malformed, e.g. an edge references a missing node."""

    stage = Stage.CONVERSION


class UnknownLayoutName(LayoutError):
    stage = Stage.ALGORITHM_LOOKUP

    def __init__(self, name: str, kind: str, known: list[str]) -> None:
        self.name = name
        self.kind = kind
        choices = ", ".join(known) if known else "none"
        super().__init__(f"unknown layout '{name}' for graph kind '{kind}'; available: {choices}")


class ParamError(LayoutError):
    """A parameter contract violation. ``param`` names the offending parameter."""

    stage = Stage.PARAMETER_VALIDATION

    def __init__(self, param: str, message: str, *, stage: Stage | None = None) -> None:
        self.param = param
        super().__init__(f"parameter '{param}': {message}", stage=stage)


class MissingRequiredParam(ParamError):
    pass


class InvalidWeightReference(ParamError):
    pass


class InvalidParam(ParamError):
    pass


class GraphShapeError(LayoutError):
    """The graph does not have the shape a layout needs (e.g. not a tree)."""

    stage = Stage.ALGORITHM_EXECUTION


class LayoutExecutionError(LayoutError):
    stage = Stage.ALGORITHM_EXECUTION
