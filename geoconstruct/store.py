"""Authoritative scene state and its batch-commit protocol."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import ConstructionError, DanglingReferenceError, SelectionError
from .geometry.math_utils import distance
from .geometry.types import Circle, Coord, Line, Point, PointId, PointKind
from .labels import LabelCursor, next_label, reset_cursor

logger = logging.getLogger(__name__)

MAX_SELECTION = 2


@dataclass(frozen=True)
class SceneView:
    """Read-only snapshot handed to renderers and printers."""

    points: Tuple[Point, ...]
    lines: Tuple[Line, ...]
    circles: Tuple[Circle, ...]
    selection: Tuple[PointId, ...] = ()
    revision: int = 0
    _selected: FrozenSet[PointId] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_selected", frozenset(self.selection))

    def is_selected(self, point: Point) -> bool:
        return point.id in self._selected

    def iter_points(self) -> Iterator[Tuple[Point, bool]]:
        """Yield ``(point, selected)`` pairs in creation order."""

        for point in self.points:
            yield point, point.id in self._selected

    def point_by_label(self, label: str) -> Optional[Point]:
        for point in self.points:
            if point.label == label:
                return point
        return None

    def segment(self, line: Line) -> Tuple[Coord, Coord]:
        return self.points[line.start].coord, self.points[line.end].coord

    def radius(self, circle: Circle) -> float:
        return distance(self.points[circle.center].coord, self.points[circle.rim].coord)


class SceneBatch:
    """Pending additions for one user action.

    Points get their ids and labels as they are added, continuing from the
    store's current state, but nothing is visible in the store until
    :meth:`GeometryStore.commit`.
    """

    def __init__(self, base_id: int, cursor: LabelCursor, revision: int):
        self.base_id = base_id
        self.revision = revision
        self.cursor = cursor
        self.points: List[Point] = []
        self.lines: List[Line] = []
        self.circles: List[Circle] = []

    def __bool__(self) -> bool:
        return bool(self.points or self.lines or self.circles)

    def allocate_label(self) -> str:
        label, self.cursor = next_label(self.cursor)
        return label

    def add_point(self, x: float, y: float, kind: Optional[PointKind] = None) -> Point:
        point = Point(
            id=self.base_id + len(self.points),
            x=x,
            y=y,
            label=self.allocate_label(),
            kind=kind,
        )
        self.points.append(point)
        return point

    def add_line(self, start: PointId, end: PointId) -> Line:
        line = Line(start, end)
        self.lines.append(line)
        return line

    def add_circle(self, center: PointId, rim: PointId) -> Circle:
        circle = Circle(center, rim)
        self.circles.append(circle)
        return circle


class GeometryStore:
    """Append-only lists of points, lines and circles plus the selection.

    Mutations go through :meth:`begin` / :meth:`commit` so that one action's
    points, primitives, label cursor and selection change together.
    """

    def __init__(self) -> None:
        self._points: List[Point] = []
        self._lines: List[Line] = []
        self._circles: List[Circle] = []
        self._selection: Tuple[PointId, ...] = ()
        self._cursor: LabelCursor = reset_cursor()
        self._revision = 0

    # -- read side -----------------------------------------------------

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def circles(self) -> Tuple[Circle, ...]:
        return tuple(self._circles)

    @property
    def selection(self) -> Tuple[PointId, ...]:
        return self._selection

    @property
    def label_cursor(self) -> LabelCursor:
        return self._cursor

    @property
    def revision(self) -> int:
        return self._revision

    def point(self, point_id: PointId) -> Point:
        if not 0 <= point_id < len(self._points):
            raise KeyError(point_id)
        return self._points[point_id]

    def selected_points(self) -> List[Point]:
        return [self._points[pid] for pid in self._selection]

    def segment(self, line: Line) -> Tuple[Coord, Coord]:
        return self._points[line.start].coord, self._points[line.end].coord

    def radius(self, circle: Circle) -> float:
        return distance(self._points[circle.center].coord, self._points[circle.rim].coord)

    def snapshot(self) -> SceneView:
        return SceneView(
            points=tuple(self._points),
            lines=tuple(self._lines),
            circles=tuple(self._circles),
            selection=self._selection,
            revision=self._revision,
        )

    # -- write side ----------------------------------------------------

    def begin(self) -> SceneBatch:
        return SceneBatch(len(self._points), self._cursor, self._revision)

    def commit(self, batch: SceneBatch, *, selection: Optional[Sequence[PointId]] = None) -> None:
        """Apply ``batch`` and optionally replace the selection, all or nothing."""

        if batch.revision != self._revision or batch.base_id != len(self._points):
            raise ConstructionError(
                f"stale batch: opened at revision {batch.revision}, store is at {self._revision}"
            )

        known = len(self._points) + len(batch.points)
        for line in batch.lines:
            missing = [pid for pid in (line.start, line.end) if not 0 <= pid < known]
            if missing:
                raise DanglingReferenceError("line", missing)
        for circle in batch.circles:
            missing = [pid for pid in (circle.center, circle.rim) if not 0 <= pid < known]
            if missing:
                raise DanglingReferenceError("circle", missing)
        new_selection = self._selection
        if selection is not None:
            new_selection = self._check_selection(selection, known)

        self._points.extend(batch.points)
        self._lines.extend(batch.lines)
        self._circles.extend(batch.circles)
        self._cursor = batch.cursor
        self._selection = new_selection
        self._revision += 1

        if batch:
            logger.debug(
                "committed batch: %d point(s) [%s], %d line(s), %d circle(s)",
                len(batch.points),
                ", ".join(p.label for p in batch.points),
                len(batch.lines),
                len(batch.circles),
            )

    def add_point(self, x: float, y: float, kind: Optional[PointKind] = None) -> Point:
        batch = self.begin()
        point = batch.add_point(x, y, kind)
        self.commit(batch)
        return point

    def add_line(self, start: PointId, end: PointId) -> Line:
        batch = self.begin()
        line = batch.add_line(start, end)
        self.commit(batch)
        return line

    def add_circle(self, center: PointId, rim: PointId) -> Circle:
        batch = self.begin()
        circle = batch.add_circle(center, rim)
        self.commit(batch)
        return circle

    def set_selection(self, ids: Iterable[PointId]) -> None:
        selection = self._check_selection(ids, len(self._points))
        if selection != self._selection:
            self._selection = selection
            self._revision += 1

    def clear_selection(self) -> None:
        self.set_selection(())

    def reset(self) -> None:
        """Drop every primitive, the selection and rewind the label cursor."""

        self._points.clear()
        self._lines.clear()
        self._circles.clear()
        self._selection = ()
        self._cursor = reset_cursor()
        self._revision += 1
        logger.info("scene reset")

    @staticmethod
    def _check_selection(ids: Iterable[PointId], known: int) -> Tuple[PointId, ...]:
        selection = tuple(int(pid) for pid in ids)
        if len(selection) > MAX_SELECTION:
            raise SelectionError(f"selection holds at most {MAX_SELECTION} points, got {len(selection)}")
        if len(set(selection)) != len(selection):
            raise SelectionError(f"selection repeats a point id: {list(selection)}")
        unknown = [pid for pid in selection if not 0 <= pid < known]
        if unknown:
            raise SelectionError(f"selection references unknown point id(s): {unknown}")
        return selection


__all__ = ["GeometryStore", "MAX_SELECTION", "SceneBatch", "SceneView"]
