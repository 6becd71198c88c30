"""Primitive types and pure intersection routines."""

from .intersections import PARALLEL_EPS, circle_circle, segment_circle, segment_segment
from .types import POINT_KINDS, Candidate, Circle, Coord, Line, Point, PointId, PointKind

__all__ = [
    "PARALLEL_EPS",
    "POINT_KINDS",
    "Candidate",
    "Circle",
    "Coord",
    "Line",
    "Point",
    "PointId",
    "PointKind",
    "circle_circle",
    "segment_circle",
    "segment_segment",
]
