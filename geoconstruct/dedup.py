"""Existence queries over the store's primitive lists.

Two notions of sameness are kept apart on purpose:

* :func:`point_exists` and :func:`find_nearby_point` compare *coordinates*;
* :func:`line_exists` and :func:`circle_exists` compare point *ids*, so a
  different point sitting on the same coordinates is a different endpoint.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from .geometry.math_utils import distance
from .geometry.types import Candidate, Circle, Line, Point, PointId

DEDUP_TOLERANCE = 0.1
RADIUS_TOLERANCE = 0.1


def point_exists(points: Iterable[Point], x: float, y: float, tol: float = DEDUP_TOLERANCE) -> bool:
    return any(abs(p.x - x) < tol and abs(p.y - y) < tol for p in points)


def find_nearby_point(points: Iterable[Point], x: float, y: float, radius: float) -> Optional[Point]:
    """First point (in creation order) strictly closer than ``radius`` to ``(x, y)``."""

    for p in points:
        if math.hypot(p.x - x, p.y - y) < radius:
            return p
    return None


def line_exists(lines: Iterable[Line], p: PointId, q: PointId) -> bool:
    return any(
        (line.start == p and line.end == q) or (line.start == q and line.end == p)
        for line in lines
    )


def circle_exists(
    circles: Iterable[Circle],
    points: Sequence[Point],
    center: PointId,
    rim: PointId,
    tol: float = RADIUS_TOLERANCE,
) -> bool:
    radius = distance(points[center].coord, points[rim].coord)
    for circle in circles:
        if circle.center != center:
            continue
        existing = distance(points[circle.center].coord, points[circle.rim].coord)
        if abs(existing - radius) < tol:
            return True
    return False


def filter_new_candidates(
    points: Sequence[Point], candidates: Iterable[Candidate], tol: float = DEDUP_TOLERANCE
) -> List[Candidate]:
    """Drop candidates that sit on a stored point or on an earlier kept candidate.

    The surviving order is the input order; sorting is left to the caller.
    """

    kept: List[Candidate] = []
    for cand in candidates:
        if point_exists(points, cand.x, cand.y, tol):
            continue
        if any(abs(k.x - cand.x) < tol and abs(k.y - cand.y) < tol for k in kept):
            continue
        kept.append(cand)
    return kept


__all__ = [
    "DEDUP_TOLERANCE",
    "RADIUS_TOLERANCE",
    "circle_exists",
    "filter_new_candidates",
    "find_nearby_point",
    "line_exists",
    "point_exists",
]
