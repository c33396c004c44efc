"""Layout data types.

The engine, registry and resolvers live in their own modules
(``graphlayout.layout.engine``, ``.registry``, ``.edges``) and are
re-exported from the top-level package.
"""

from graphlayout.layout.circular import project, to_cartesian
from graphlayout.layout.types import (
    AlgorithmOutput,
    ConnectionPath,
    EdgeRecord,
    LayoutResult,
    NodePosition,
    RawPosition,
)

__all__ = [
    "AlgorithmOutput",
    "ConnectionPath",
    "EdgeRecord",
    "LayoutResult",
    "NodePosition",
    "RawPosition",
    "project",
    "to_cartesian",
]
