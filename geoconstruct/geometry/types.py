from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

PointId = int
Coord = Tuple[float, float]

PointKind = Literal["line-line", "line-circle", "circle-circle"]

POINT_KINDS: Tuple[str, ...] = ("line-line", "line-circle", "circle-circle")


@dataclass(frozen=True)
class Point:
    """Labeled point; ``id`` is its index in the store's point list."""

    id: PointId
    x: float
    y: float
    label: str
    kind: Optional[PointKind] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        if self.kind is not None and self.kind not in POINT_KINDS:
            raise ValueError(f"unknown point kind {self.kind!r}")

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


@dataclass(frozen=True)
class Line:
    """Segment between two stored points, addressed by id."""

    start: PointId
    end: PointId

    def key(self) -> Tuple[PointId, PointId]:
        """Direction-independent identity of the segment."""

        return (self.start, self.end) if self.start <= self.end else (self.end, self.start)


@dataclass(frozen=True)
class Circle:
    """Circle through ``rim`` around ``center``; the radius is always derived."""

    center: PointId
    rim: PointId


@dataclass(frozen=True)
class Candidate:
    """Intersection coordinate awaiting dedup and labeling."""

    x: float
    y: float
    kind: PointKind

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


__all__ = [
    "Candidate",
    "Circle",
    "Coord",
    "Line",
    "POINT_KINDS",
    "Point",
    "PointId",
    "PointKind",
]
