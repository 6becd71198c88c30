from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .types import Coord


def _vec2(a: Coord, b: Coord) -> Tuple[float, float]:
    return b[0] - a[0], b[1] - a[1]


def distance(a: Coord, b: Coord) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def unit_direction(frm: Coord, to: Coord, *, eps: float = 1e-12) -> Optional[np.ndarray]:
    """Unit vector pointing from ``frm`` to ``to``; ``None`` when they coincide."""

    vec = np.asarray(to, dtype=float) - np.asarray(frm, dtype=float)
    norm_sq = float(np.dot(vec, vec))
    if norm_sq <= eps:
        return None
    return vec / math.sqrt(norm_sq)


def signed_projection(point: Coord, anchor: Coord, direction: np.ndarray) -> float:
    """Signed distance of ``point`` along unit ``direction`` measured from ``anchor``."""

    rel = np.asarray(point, dtype=float) - np.asarray(anchor, dtype=float)
    return float(np.dot(rel, direction))


__all__ = [
    "_vec2",
    "distance",
    "signed_projection",
    "unit_direction",
]
