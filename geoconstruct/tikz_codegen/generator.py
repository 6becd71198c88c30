"""TikZ renderer for construction scenes.

Scene coordinates follow the screen convention (y grows downwards); the
renderer flips them so the picture matches what the user clicked.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..store import SceneView

NORMALIZED_SPAN = 8.0

standalone_tpl = r"""\documentclass[border=2pt]{standalone}
\usepackage{tikz}
\tikzset{
  gs/dot radius/.store in=\gsDotR,       gs/dot radius=1.4pt,
  gs/line width/.store in=\gsLW,         gs/line width=0.8pt,
  ptlabel/.style={font=\footnotesize, inner sep=1pt},
  carrier/.style={line width=\gsLW},
  circle/.style={line width=\gsLW},
  selected/.style={fill=blue},
  intersection/.style={fill=red},
}
\pgfdeclarelayer{bg}\pgfdeclarelayer{fg}\pgfsetlayers{bg,main,fg}
\begin{document}
%s
%s
\end{document}
"""


def generate_tikz_document(
    view: SceneView,
    *,
    title: Optional[str] = None,
    normalize: bool = False,
) -> str:
    """Render a standalone document for ``view``."""

    header = ""
    if title:
        header = "% " + title.strip().replace("\n", " ")
    return standalone_tpl % (header, generate_tikz_code(view, normalize=normalize))


def generate_tikz_code(view: SceneView, *, normalize: bool = False) -> str:
    coords = _prepare_coordinates(view, normalize=normalize)
    return _emit_tikz_picture(view, coords)


def _node_name(label: str) -> str:
    return f"p{label}"


def _prepare_coordinates(view: SceneView, *, normalize: bool) -> Dict[str, Tuple[float, float]]:
    if not view.points:
        return {}
    arr = np.array([[p.x, -p.y] for p in view.points], dtype=float)
    if normalize:
        lo = arr.min(axis=0)
        hi = arr.max(axis=0)
        span = max(float(np.max(hi - lo)), 1e-9)
        arr = (arr - 0.5 * (lo + hi)) * (NORMALIZED_SPAN / span)
    return {p.label: (float(x), float(y)) for p, (x, y) in zip(view.points, arr)}


def _emit_tikz_picture(view: SceneView, coords: Dict[str, Tuple[float, float]]) -> str:
    lines: List[str] = ["\\begin{tikzpicture}"]
    labels = {p.id: p.label for p in view.points}

    for point in view.points:
        x, y = coords[point.label]
        lines.append(
            f"  \\coordinate ({_node_name(point.label)}) at ({_format_float(x)}, {_format_float(y)});"
        )
    if view.points:
        lines.append("")

    lines.append("  \\begin{pgfonlayer}{main}")
    for line in view.lines:
        a = _node_name(labels[line.start])
        b = _node_name(labels[line.end])
        lines.append(f"    \\draw[carrier] ({a}) -- ({b});")
    for circle in view.circles:
        center = coords[labels[circle.center]]
        rim = coords[labels[circle.rim]]
        radius = math.dist(center, rim)
        if radius <= 0:
            continue
        lines.append(
            "    \\draw[circle] ({c}) circle ({r});".format(
                c=_node_name(labels[circle.center]), r=_format_float(radius)
            )
        )
    lines.append("  \\end{pgfonlayer}")
    lines.append("")

    lines.append("  \\begin{pgfonlayer}{fg}")
    for point, selected in view.iter_points():
        name = _node_name(point.label)
        if selected:
            style = "[selected]"
        elif point.kind:
            style = "[intersection]"
        else:
            style = ""
        lines.append(f"    \\fill{style} ({name}) circle (\\gsDotR);")
        lines.append(f"    \\node[ptlabel,above right] at ({name}) {{${point.label}$}};")
    lines.append("  \\end{pgfonlayer}")
    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted
