"""Per-tool state machine turning single clicks into construction steps.

The controller state is ``(tool, selection size)``. Each legal combination
has exactly one handler in :attr:`ToolController.HANDLERS`; every handler
finishes by committing one batch to the store (possibly empty, possibly only
changing the selection).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Sequence, Tuple, Union

from .config import ConstructionConfig, get_construction_config
from .dedup import circle_exists, filter_new_candidates, find_nearby_point, line_exists
from .errors import UnknownToolError
from .geometry.intersections import circle_circle, segment_circle, segment_segment
from .geometry.math_utils import distance, signed_projection, unit_direction
from .geometry.types import Candidate, Circle, Coord, Line, Point, PointId
from .logging_utils import apply_debug_logging
from .store import GeometryStore, SceneBatch

logger = logging.getLogger(__name__)

Tool = Literal["line", "extend", "circle"]

TOOLS: Tuple[str, ...] = ("line", "extend", "circle")


def normalize_tool(tool: object) -> str:
    if isinstance(tool, str):
        name = tool.strip().lower()
        if name in TOOLS:
            return name
    raise UnknownToolError(tool)


@dataclass(frozen=True)
class ToolState:
    tool: str
    selection_size: int

    def __str__(self) -> str:
        return f"{self.tool}/{self.selection_size}"


@dataclass(frozen=True)
class ActionOutcome:
    """What a single action did; ``rejected`` names the guard that stopped it."""

    state: ToolState
    next_state: ToolState
    points: Tuple[Point, ...] = ()
    lines: Tuple[Line, ...] = ()
    circles: Tuple[Circle, ...] = ()
    rejected: Optional[str] = None

    @property
    def created(self) -> bool:
        return bool(self.points or self.lines or self.circles)

    @property
    def intersections(self) -> Tuple[Point, ...]:
        return tuple(p for p in self.points if p.kind is not None)


@dataclass
class _Step:
    batch: SceneBatch
    selection: Tuple[PointId, ...]
    rejected: Optional[str] = None
    notes: List[str] = field(default_factory=list)


class ToolController:
    """Single writer of a :class:`GeometryStore`."""

    HANDLERS: Dict[ToolState, str] = {
        ToolState("line", 0): "_line_pick_start",
        ToolState("line", 1): "_line_finish",
        ToolState("extend", 0): "_pick_existing",
        ToolState("extend", 1): "_pick_existing",
        ToolState("extend", 2): "_extend_finish",
        ToolState("circle", 0): "_pick_existing",
        ToolState("circle", 1): "_circle_finish",
    }

    def __init__(
        self,
        store: GeometryStore,
        config: Optional[ConstructionConfig] = None,
        tool: str = "line",
    ):
        self.store = store
        self.config = config or get_construction_config()
        self._tool = normalize_tool(tool)

    @property
    def tool(self) -> str:
        return self._tool

    @property
    def state(self) -> ToolState:
        return ToolState(self._tool, len(self.store.selection))

    def set_tool(self, tool: Union[str, Tool]) -> None:
        """Switch tools; any half-finished construction is dropped."""

        name = normalize_tool(tool)
        if self.store.selection:
            logger.info("tool %s -> %s: abandoning selection", self._tool, name)
        self._tool = name
        self.store.clear_selection()

    def clear(self) -> None:
        self.store.reset()

    def apply_action(self, tool: Union[str, Tool], coord: Sequence[float]) -> ActionOutcome:
        name = normalize_tool(tool)
        if name != self._tool:
            self.set_tool(name)

        x, y = float(coord[0]), float(coord[1])
        state = self.state
        handler_name = self.HANDLERS.get(state)
        if handler_name is None:
            # only reachable if the selection was set externally
            logger.warning("no handler for state %s; clearing selection", state)
            self.store.clear_selection()
            return ActionOutcome(state, self.state, rejected="invalid-state")

        nearby = find_nearby_point(self.store.points, x, y, self.config.hit_radius)
        step: _Step = getattr(self, handler_name)(x, y, nearby)
        self.store.commit(step.batch, selection=step.selection)

        outcome = ActionOutcome(
            state=state,
            next_state=self.state,
            points=tuple(step.batch.points),
            lines=tuple(step.batch.lines),
            circles=tuple(step.batch.circles),
            rejected=step.rejected,
        )
        if step.rejected:
            logger.info("action %s at (%.3f, %.3f) rejected: %s", state, x, y, step.rejected)
        for note in step.notes:
            logger.info(note)
        return outcome

    # -- handlers ------------------------------------------------------

    def _line_pick_start(self, x: float, y: float, nearby: Optional[Point]) -> _Step:
        batch = self.store.begin()
        if nearby is not None:
            return _Step(batch, (nearby.id,))
        start = batch.add_point(x, y)
        return _Step(batch, (start.id,))

    def _line_finish(self, x: float, y: float, nearby: Optional[Point]) -> _Step:
        batch = self.store.begin()
        start = self.store.point(self.store.selection[0])

        if nearby is not None and nearby.id != start.id:
            end = nearby
        else:
            end = batch.add_point(x, y)

        if line_exists(self.store.lines, start.id, end.id):
            return _Step(self.store.begin(), (), rejected="line-exists")

        candidates = self._segment_candidates(start.coord, end.coord)
        fresh = self._dedup(candidates, batch)
        self._add_intersections(batch, fresh)
        line = batch.add_line(start.id, end.id)
        return _Step(batch, (), notes=[self._describe_line(line, batch)])

    def _pick_existing(self, x: float, y: float, nearby: Optional[Point]) -> _Step:
        batch = self.store.begin()
        selection = self.store.selection
        if nearby is None:
            return _Step(batch, selection, rejected="no-point-nearby")
        if nearby.id in selection:
            return _Step(batch, selection, rejected="already-selected")
        return _Step(batch, selection + (nearby.id,))

    def _extend_finish(self, x: float, y: float, nearby: Optional[Point]) -> _Step:
        first, second = self.store.selected_points()
        batch = self.store.begin()

        toward_first = unit_direction(second.coord, first.coord, eps=self.config.direction_epsilon)
        if toward_first is None:
            return _Step(batch, (), rejected="zero-length-direction")
        extension = -toward_first

        # a click behind the second point still extends forward by its magnitude
        click_distance = abs(signed_projection((x, y), second.coord, extension))
        if click_distance == 0.0:
            click_distance = distance(second.coord, (x, y))

        ex, ey = second.coord + extension * click_distance
        endpoint = batch.add_point(float(ex), float(ey))

        candidates = self._segment_candidates(second.coord, endpoint.coord)
        fresh = [
            cand
            for cand in self._dedup(candidates, batch)
            if 0.0 < signed_projection(cand.coord, second.coord, extension) <= click_distance
        ]
        self._add_intersections(batch, fresh)
        line = batch.add_line(second.id, endpoint.id)
        return _Step(batch, (), notes=[self._describe_line(line, batch)])

    def _circle_finish(self, x: float, y: float, nearby: Optional[Point]) -> _Step:
        batch = self.store.begin()
        center = self.store.point(self.store.selection[0])
        if nearby is None or nearby.id == center.id:
            return _Step(batch, self.store.selection, rejected="no-rim-point")

        if circle_exists(
            self.store.circles,
            self.store.points,
            center.id,
            nearby.id,
            self.config.radius_tolerance,
        ):
            return _Step(batch, (), rejected="circle-exists")

        circle = Circle(center.id, nearby.id)
        radius = self.store.radius(circle)
        candidates: List[Candidate] = []
        for other in self.store.circles:
            other_center = self.store.point(other.center).coord
            for cx, cy in circle_circle(center.coord, radius, other_center, self.store.radius(other)):
                candidates.append(Candidate(cx, cy, "circle-circle"))
        for line in self.store.lines:
            a, b = self.store.segment(line)
            for cx, cy in segment_circle(a, b, center.coord, radius):
                candidates.append(Candidate(cx, cy, "line-circle"))

        self._add_intersections(batch, self._dedup(candidates, batch))
        batch.add_circle(circle.center, circle.rim)
        note = "circle %s(%s) committed with %d intersection(s)" % (
            center.label,
            nearby.label,
            len(batch.points),
        )
        return _Step(batch, (), notes=[note])

    # -- helpers -------------------------------------------------------

    def _segment_candidates(self, a: Coord, b: Coord) -> List[Candidate]:
        candidates: List[Candidate] = []
        for line in self.store.lines:
            c, d = self.store.segment(line)
            for cx, cy in segment_segment(a, b, c, d, parallel_eps=self.config.parallel_epsilon):
                candidates.append(Candidate(cx, cy, "line-line"))
        for circle in self.store.circles:
            center = self.store.point(circle.center).coord
            for cx, cy in segment_circle(a, b, center, self.store.radius(circle)):
                candidates.append(Candidate(cx, cy, "line-circle"))
        return candidates

    def _dedup(self, candidates: List[Candidate], batch: SceneBatch) -> List[Candidate]:
        known = self.store.points + tuple(batch.points)
        return filter_new_candidates(known, candidates, self.config.dedup_tolerance)

    @staticmethod
    def _add_intersections(batch: SceneBatch, candidates: List[Candidate]) -> None:
        for cand in sorted(candidates, key=lambda c: (c.x, c.y)):
            batch.add_point(cand.x, cand.y, cand.kind)

    def _describe_line(self, line: Line, batch: SceneBatch) -> str:
        labels = {p.id: p.label for p in self.store.points}
        labels.update((p.id, p.label) for p in batch.points)
        found = [p.label for p in batch.points if p.kind is not None]
        return "line %s-%s committed with %d intersection(s)%s" % (
            labels[line.start],
            labels[line.end],
            len(found),
            f": {', '.join(found)}" if found else "",
        )


__all__ = [
    "ActionOutcome",
    "TOOLS",
    "Tool",
    "ToolController",
    "ToolState",
    "normalize_tool",
]


apply_debug_logging(globals(), logger=logger)
