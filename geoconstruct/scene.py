"""Public entry point bundling a store with its controller."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .ast import Script
from .config import ConstructionConfig
from .errors import ConstructionError
from .labels import format_label, parse_label
from .store import GeometryStore, SceneView
from .tools import ActionOutcome, Tool, ToolController

logger = logging.getLogger(__name__)


class Scene:
    """A construction in progress.

    ``apply_action`` is the action API, ``clear`` the reset API and ``view``
    the read API consumed by renderers.
    """

    def __init__(self, config: Optional[ConstructionConfig] = None, tool: str = "line"):
        self.store = GeometryStore()
        self.controller = ToolController(self.store, config, tool)

    @property
    def tool(self) -> str:
        return self.controller.tool

    def set_tool(self, tool: Union[str, Tool]) -> None:
        self.controller.set_tool(tool)

    def apply_action(self, tool: Union[str, Tool], coord: Sequence[float]) -> ActionOutcome:
        return self.controller.apply_action(tool, coord)

    def click(self, x: float, y: float) -> ActionOutcome:
        """Apply an action with the currently active tool."""

        return self.controller.apply_action(self.controller.tool, (x, y))

    def clear(self) -> None:
        self.controller.clear()

    def view(self) -> SceneView:
        return self.store.snapshot()


def run_script(script: Script, scene: Optional[Scene] = None) -> Scene:
    """Replay every action of ``script`` onto ``scene`` (a fresh one by default)."""

    scene = scene or Scene()
    outcomes: List[ActionOutcome] = []
    for action in script.actions:
        if action.kind == "tool":
            scene.set_tool(action.data["tool"])
        elif action.kind == "clear":
            scene.clear()
        elif action.kind == "click":
            if "label" in action.data:
                wanted = format_label(parse_label(action.data["label"]))
                point = scene.view().point_by_label(wanted)
                if point is None:
                    raise ConstructionError(
                        f"[line {action.span.line}, col {action.span.col}] unknown point {wanted}"
                    )
                coord = point.coord
            else:
                coord = action.data["coord"]
            outcomes.append(scene.click(coord[0], coord[1]))
        else:
            raise ValueError(f"unsupported action kind {action.kind!r}")
    logger.info(
        "replayed %d action(s): %d click(s), %d rejected",
        len(script.actions),
        len(outcomes),
        sum(1 for outcome in outcomes if outcome.rejected),
    )
    return scene


__all__ = ["Scene", "run_script"]
