"""Centralized configuration for graphlayout."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class LayoutConfig:
    """Defaults applied when a layout parameter is not given explicitly."""

    default_layout: str = "auto"
    force_max_iter: int = 50
    seed: int = 42
    treemap_algorithm: str = "squarify"
    hive_center_size: float = 0.1
    hive_offset: float = math.pi / 2
