import math

import pytest

from geoconstruct.errors import UnknownToolError
from geoconstruct.geometry.types import Line
from geoconstruct.labels import LabelCursor
from geoconstruct.scene import Scene
from geoconstruct.tools import ToolController, ToolState


def _labels(scene):
    return [p.label for p in scene.view().points]


def _coords(scene):
    return {p.label: p.coord for p in scene.view().points}


def _line_labels(scene):
    view = scene.view()
    return [(view.points[l.start].label, view.points[l.end].label) for l in view.lines]


def _cross(scene):
    scene.apply_action("line", (100, 100))
    scene.apply_action("line", (300, 100))
    scene.apply_action("line", (200, 50))
    scene.apply_action("line", (200, 150))


def test_every_state_has_one_handler():
    states = set(ToolController.HANDLERS)

    assert states == {
        ToolState("line", 0),
        ToolState("line", 1),
        ToolState("extend", 0),
        ToolState("extend", 1),
        ToolState("extend", 2),
        ToolState("circle", 0),
        ToolState("circle", 1),
    }


def test_line_tool_creates_intersection_with_next_label():
    scene = Scene()

    scene.apply_action("line", (100, 100))
    outcome = scene.apply_action("line", (300, 100))
    assert outcome.intersections == ()
    assert _labels(scene) == ["A", "B"]

    scene.apply_action("line", (200, 50))
    outcome = scene.apply_action("line", (200, 150))

    assert _labels(scene) == ["A", "B", "C", "D", "E"]
    assert _coords(scene)["E"] == pytest.approx((200.0, 100.0))
    assert scene.view().points[4].kind == "line-line"
    assert [p.label for p in outcome.intersections] == ["E"]
    assert _line_labels(scene) == [("A", "B"), ("C", "D")]
    assert scene.view().selection == ()


def test_line_tool_first_click_selects_then_second_completes():
    scene = Scene()

    first = scene.apply_action("line", (10, 10))

    assert first.state == ToolState("line", 0)
    assert first.next_state == ToolState("line", 1)
    assert [p.label for p in scene.store.selected_points()] == ["A"]

    second = scene.apply_action("line", (50, 10))
    assert second.next_state == ToolState("line", 0)
    assert len(second.lines) == 1


def test_line_tool_reuses_nearby_points():
    scene = Scene()
    _cross(scene)

    # both clicks land within the hit radius of A and C
    scene.apply_action("line", (104, 103))
    scene.apply_action("line", (197, 52))

    assert _labels(scene) == ["A", "B", "C", "D", "E"]
    assert _line_labels(scene)[-1] == ("A", "C")


def test_duplicate_line_is_noop_without_label_allocation():
    scene = Scene()
    scene.apply_action("line", (100, 100))
    scene.apply_action("line", (300, 100))
    cursor = scene.store.label_cursor

    same = [scene.apply_action("line", (100, 100)), scene.apply_action("line", (300, 100))]
    reverse = [scene.apply_action("line", (300, 100)), scene.apply_action("line", (100, 100))]

    assert same[-1].rejected == "line-exists"
    assert reverse[-1].rejected == "line-exists"
    assert len(scene.view().lines) == 1
    assert scene.store.label_cursor == cursor == LabelCursor("C", 0)
    assert scene.view().selection == ()


def test_intersection_near_existing_point_is_not_duplicated():
    scene = Scene()
    _cross(scene)

    # crosses A-B at x=199.95 and C-D at y=100.05, both within 0.1 of E
    scene.apply_action("line", (150, 50))
    outcome = scene.apply_action("line", (250, 150.1))

    assert outcome.intersections == ()
    assert _labels(scene) == ["A", "B", "C", "D", "E", "F", "G"]


def test_intersections_are_labeled_in_spatial_order():
    scene = Scene()
    scene.apply_action("line", (0, 0))
    scene.apply_action("line", (100, 0))
    scene.apply_action("circle", (0, 0))
    scene.apply_action("circle", (100, 0))

    scene.apply_action("line", (50, -100))
    outcome = scene.apply_action("line", (50, 100))

    coords = _coords(scene)
    assert [p.label for p in outcome.points] == ["D", "E", "F", "G"]
    assert coords["E"] == pytest.approx((50.0, -50.0 * math.sqrt(3)))
    assert coords["F"] == pytest.approx((50.0, 0.0))
    assert coords["G"] == pytest.approx((50.0, 50.0 * math.sqrt(3)))
    assert [p.kind for p in outcome.points] == [None, "line-circle", "line-line", "line-circle"]


def test_circle_tool_dedups_against_points_of_other_kinds():
    scene = Scene()
    scene.apply_action("line", (0, 0))
    scene.apply_action("line", (100, 0))
    scene.apply_action("circle", (0, 0))
    scene.apply_action("circle", (100, 0))
    scene.apply_action("line", (50, -100))
    scene.apply_action("line", (50, 100))

    # centered at B through A: meets the first circle exactly at E and G
    scene.apply_action("circle", (100, 0))
    outcome = scene.apply_action("circle", (0, 0))

    assert len(outcome.circles) == 1
    assert outcome.points == ()
    assert len(scene.view().circles) == 2


def test_circle_circle_intersections():
    scene = Scene(tool="circle")
    for x in (0.0, 20.0, 30.0, 45.0):
        scene.store.add_point(x, 0.0)

    scene.apply_action("circle", (0, 0))
    scene.apply_action("circle", (20, 0))
    scene.apply_action("circle", (30, 0))
    outcome = scene.apply_action("circle", (45, 0))

    assert [p.label for p in outcome.points] == ["E", "F"]
    assert all(p.kind == "circle-circle" for p in outcome.points)
    e, f = outcome.points
    assert e.y < 0 < f.y
    for p in (e, f):
        assert math.hypot(p.x, p.y) == pytest.approx(20.0)
        assert math.hypot(p.x - 30.0, p.y) == pytest.approx(15.0)


def test_circle_tool_never_creates_points_while_selecting():
    scene = Scene()

    outcome = scene.apply_action("circle", (10, 10))

    assert outcome.rejected == "no-point-nearby"
    assert scene.view().points == ()


def test_circle_tool_ignores_same_point_as_rim():
    scene = Scene(tool="circle")
    scene.store.add_point(0.0, 0.0)
    scene.apply_action("circle", (0, 0))

    outcome = scene.apply_action("circle", (2, 2))

    assert outcome.rejected == "no-rim-point"
    assert scene.view().selection == (0,)


def test_existing_circle_is_noop_but_clears_selection():
    scene = Scene(tool="circle")
    scene.store.add_point(0.0, 0.0)
    scene.store.add_point(50.0, 0.0)
    scene.store.add_point(0.0, 50.05)
    scene.apply_action("circle", (0, 0))
    scene.apply_action("circle", (50, 0))

    scene.apply_action("circle", (0, 0))
    outcome = scene.apply_action("circle", (0, 50))

    assert outcome.rejected == "circle-exists"
    assert len(scene.view().circles) == 1
    assert scene.view().selection == ()


def test_extend_tool_adds_endpoint_and_intersections_along_extension():
    scene = Scene()
    scene.apply_action("line", (100, 100))
    scene.apply_action("line", (200, 100))
    scene.apply_action("line", (300, 50))
    scene.apply_action("line", (300, 150))

    scene.apply_action("extend", (100, 100))
    scene.apply_action("extend", (200, 100))
    outcome = scene.apply_action("extend", (400, 130))

    coords = _coords(scene)
    assert [p.label for p in outcome.points] == ["E", "F"]
    assert coords["E"] == pytest.approx((400.0, 100.0))
    assert coords["F"] == pytest.approx((300.0, 100.0))
    assert outcome.points[1].kind == "line-line"
    assert _line_labels(scene)[-1] == ("B", "E")
    assert scene.view().selection == ()


def test_extend_tool_requires_existing_points():
    scene = Scene(tool="extend")

    outcome = scene.apply_action("extend", (10, 10))

    assert outcome.rejected == "no-point-nearby"
    assert scene.view().points == ()
    assert scene.view().selection == ()


def test_extend_tool_guards_zero_length_direction():
    scene = Scene(tool="extend")
    scene.store.add_point(0.0, 0.0)
    scene.store.add_point(0.0, 0.0)
    scene.store.set_selection([0, 1])

    outcome = scene.apply_action("extend", (50, 0))

    assert outcome.rejected == "zero-length-direction"
    assert len(scene.view().points) == 2
    assert scene.view().lines == ()
    assert scene.view().selection == ()


def test_extend_tool_click_behind_second_point_still_extends():
    scene = Scene()
    scene.apply_action("line", (100, 100))
    scene.apply_action("line", (300, 100))

    scene.apply_action("extend", (100, 100))
    scene.apply_action("extend", (300, 100))
    outcome = scene.apply_action("extend", (250, 140))

    assert outcome.rejected is None
    assert [(p.label, p.x, p.y) for p in outcome.points] == [("C", 350.0, 100.0)]
    assert outcome.lines == (Line(1, 2),)
    assert scene.view().selection == ()


def test_extend_tool_perpendicular_click_uses_distance_to_second_point():
    scene = Scene()
    scene.apply_action("line", (100, 100))
    scene.apply_action("line", (300, 100))

    scene.apply_action("extend", (100, 100))
    scene.apply_action("extend", (300, 100))
    outcome = scene.apply_action("extend", (300, 140))

    assert outcome.rejected is None
    assert [(p.x, p.y) for p in outcome.points] == [(340.0, 100.0)]
    assert len(scene.view().lines) == 2


def test_switching_tool_abandons_selection():
    scene = Scene()
    scene.apply_action("line", (10, 10))
    assert scene.view().selection == (0,)

    scene.set_tool("circle")

    assert scene.view().selection == ()
    assert _labels(scene) == ["A"]


def test_action_with_other_tool_switches_first():
    scene = Scene()
    scene.apply_action("line", (10, 10))

    outcome = scene.apply_action("circle", (10, 10))

    assert scene.tool == "circle"
    assert outcome.state == ToolState("circle", 0)
    assert scene.view().selection == (0,)


def test_unknown_tool_is_rejected():
    scene = Scene()

    with pytest.raises(UnknownToolError):
        scene.apply_action("polygon", (0, 0))


def test_clear_resets_labels():
    scene = Scene()
    _cross(scene)

    scene.clear()
    scene.apply_action("line", (5, 5))

    assert _labels(scene) == ["A"]
    assert scene.view().lines == ()
