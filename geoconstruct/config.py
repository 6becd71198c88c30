"""Tolerances shared by the construction engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class ConstructionConfig:
    """Numeric thresholds used by dedup, hit testing and intersection code."""

    # both axes must be within this window for two coordinates to be one point
    dedup_tolerance: float = 0.1
    # circles sharing a center are equal when radii differ by less than this
    radius_tolerance: float = 0.1
    # |denominator| below this marks two segments as parallel
    parallel_epsilon: float = 1e-4
    # scene-unit radius around an action coordinate that picks an existing point
    hit_radius: float = 10.0
    # squared length below which an extension direction is treated as zero
    direction_epsilon: float = 1e-12

    def __post_init__(self) -> None:
        for name in ("dedup_tolerance", "radius_tolerance", "parallel_epsilon", "hit_radius"):
            value = float(getattr(self, name))
            if value <= 0.0:
                raise ValueError(f"{name} must be positive, got {value!r}")
            setattr(self, name, value)
        self.direction_epsilon = float(self.direction_epsilon)


_CONSTRUCTION_CONFIG = ConstructionConfig()


def get_construction_config() -> ConstructionConfig:
    return copy.deepcopy(_CONSTRUCTION_CONFIG)


def set_construction_config(config: ConstructionConfig) -> None:
    global _CONSTRUCTION_CONFIG
    _CONSTRUCTION_CONFIG = copy.deepcopy(config)
