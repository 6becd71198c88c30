"""Pairwise intersection of segments and circles.

All functions are pure and report degenerate configurations (parallel
segments, missed circles, concentric equal circles) as an empty list.
"""

from __future__ import annotations

import logging
import math
from typing import List

from ..logging_utils import apply_debug_logging
from .math_utils import _vec2
from .types import Coord

logger = logging.getLogger(__name__)

PARALLEL_EPS = 1e-4


def segment_segment(
    a: Coord, b: Coord, c: Coord, d: Coord, *, parallel_eps: float = PARALLEL_EPS
) -> List[Coord]:
    """Intersection of segments ``a-b`` and ``c-d``.

    Touching at an endpoint counts. Parallel and collinear-overlapping
    segments both return ``[]``; overlap is not detected separately.
    """

    x1, y1 = a
    x2, y2 = b
    x3, y3 = c
    x4, y4 = d

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < parallel_eps:
        return []

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return [(x1 + t * (x2 - x1), y1 + t * (y2 - y1))]
    return []


def segment_circle(a: Coord, b: Coord, center: Coord, radius: float) -> List[Coord]:
    """Points where segment ``a-b`` meets the circle.

    A tangent segment returns the touching point twice; callers dedup.
    """

    h, k = center
    x1, y1 = a[0] - h, a[1] - k
    dx, dy = _vec2(a, b)

    qa = dx * dx + dy * dy
    if qa == 0.0:
        return []
    qb = 2.0 * (x1 * dx + y1 * dy)
    qc = x1 * x1 + y1 * y1 - radius * radius

    disc = qb * qb - 4.0 * qa * qc
    if disc < 0.0:
        return []

    root = math.sqrt(disc)
    hits: List[Coord] = []
    for t in ((-qb + root) / (2.0 * qa), (-qb - root) / (2.0 * qa)):
        if 0.0 <= t <= 1.0:
            hits.append((a[0] + t * dx, a[1] + t * dy))
    return hits


def circle_circle(c1: Coord, r1: float, c2: Coord, r2: float) -> List[Coord]:
    """Intersections of two circles.

    Returns exactly two points whenever the circles meet (equal when tangent).
    Only exactly concentric equal circles are rejected as coincident; a
    near-concentric pair falls through to the range checks.
    """

    x1, y1 = c1
    x2, y2 = c2
    d = math.hypot(x2 - x1, y2 - y1)

    if d > r1 + r2 or d < abs(r1 - r2) or (d == 0.0 and r1 == r2):
        return []

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = math.sqrt(max(r1 * r1 - a * a, 0.0))

    mx = x1 + a * (x2 - x1) / d
    my = y1 + a * (y2 - y1) / d

    off_x = h * (y2 - y1) / d
    off_y = h * (x2 - x1) / d

    return [(mx + off_x, my - off_y), (mx - off_x, my + off_y)]


__all__ = ["PARALLEL_EPS", "circle_circle", "segment_circle", "segment_segment"]


apply_debug_logging(globals(), logger=logger)
