from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Span:
    line: int
    col: int


@dataclass
class Action:
    kind: str  # 'tool', 'click' or 'clear'
    span: Span
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Script:
    actions: List[Action] = field(default_factory=list)

    @property
    def clicks(self) -> List[Action]:
        return [action for action in self.actions if action.kind == "click"]
