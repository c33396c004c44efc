"""Shared type definitions for graphlayout.

Enums used across adapters, layout algorithms, and the engine.
"""

from __future__ import annotations

from enum import Enum


class Stage(Enum):
    """Pipeline stage that produced an error."""

    ADAPTER_RESOLUTION = "adapter resolution"
    CONVERSION = "conversion"
    ALGORITHM_LOOKUP = "algorithm lookup"
    PARAMETER_VALIDATION = "parameter validation"
    ALGORITHM_EXECUTION = "algorithm execution"
    DERIVATION = "derivation"


class TreemapAlgorithm(Enum):
    SQUARIFY = "squarify"
    SLICE_DICE = "slice_dice"


class Anchor(Enum):
    CENTER = "center"  # rectangle midpoint
    CORNER = "corner"  # (xmin, ymin)
