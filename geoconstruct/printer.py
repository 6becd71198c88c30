from typing import Dict, List

from .geometry.types import Circle, Line, Point
from .store import SceneView


def _fmt(value: float) -> str:
    formatted = f"{value:.3f}".rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def point_str(point: Point) -> str:
    line = f"point {point.label} ({_fmt(point.x)}, {_fmt(point.y)})"
    if point.kind:
        line += f" [kind={point.kind}]"
    return line


def line_str(line: Line, labels: Dict[int, str]) -> str:
    return f"line {labels[line.start]}-{labels[line.end]}"


def circle_str(circle: Circle, view: SceneView, labels: Dict[int, str]) -> str:
    return (
        f"circle center {labels[circle.center]} through {labels[circle.rim]}"
        f" [radius={_fmt(view.radius(circle))}]"
    )


def print_scene(view: SceneView, *, include_selection: bool = True) -> str:
    """Render ``view`` as one primitive per line, points first."""

    labels = {point.id: point.label for point in view.points}
    lines: List[str] = []
    lines.extend(point_str(point) for point in view.points)
    lines.extend(line_str(line, labels) for line in view.lines)
    lines.extend(circle_str(circle, view, labels) for circle in view.circles)
    if include_selection and view.selection:
        lines.append("selection " + ", ".join(labels[pid] for pid in view.selection))
    return "".join(line + "\n" for line in lines)


def summarize_scene(view: SceneView) -> str:
    intersections = sum(1 for point in view.points if point.kind)
    return (
        f"{len(view.points)} point(s) ({intersections} intersection(s)), "
        f"{len(view.lines)} line(s), {len(view.circles)} circle(s)"
    )
