"""Spatial label sequence: A, B, ..., Z, A1, B1, ..., Z1, A2, ..."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Tuple

_LABEL_RE = re.compile(r"^([A-Z])([1-9][0-9]*)?$")


@dataclass(frozen=True)
class LabelCursor:
    """Position in the label sequence.

    ``number == 0`` renders as the bare letter; otherwise the number is
    appended. Cursors are immutable; :func:`next_label` returns a new one.
    """

    letter: str = "A"
    number: int = 0

    def __post_init__(self) -> None:
        if len(self.letter) != 1 or not ("A" <= self.letter <= "Z"):
            raise ValueError(f"label letter must be A..Z, got {self.letter!r}")
        if self.number < 0:
            raise ValueError(f"label number must be >= 0, got {self.number!r}")

    def __str__(self) -> str:
        return format_label(self)


def reset_cursor() -> LabelCursor:
    return LabelCursor("A", 0)


def format_label(cursor: LabelCursor) -> str:
    if cursor.number == 0:
        return cursor.letter
    return f"{cursor.letter}{cursor.number}"


def next_label(cursor: LabelCursor) -> Tuple[str, LabelCursor]:
    """Return the label at ``cursor`` and the cursor that follows it."""

    label = format_label(cursor)
    if cursor.letter == "Z":
        return label, LabelCursor("A", cursor.number + 1)
    return label, LabelCursor(chr(ord(cursor.letter) + 1), cursor.number)


def iter_labels(cursor: LabelCursor = LabelCursor()) -> Iterator[str]:
    while True:
        label, cursor = next_label(cursor)
        yield label


def parse_label(text: str) -> LabelCursor:
    """Return the cursor whose label renders as ``text``.

    ``"A"`` maps to ``A/0`` and ``"C12"`` to ``C/12``. Lowercase input is
    accepted; ``"A0"`` is rejected since that label is spelled ``"A"``.
    """

    match = _LABEL_RE.match(text.strip().upper())
    if not match:
        raise ValueError(f"not a point label: {text!r}")
    letter, digits = match.groups()
    return LabelCursor(letter, int(digits) if digits else 0)


__all__ = [
    "LabelCursor",
    "format_label",
    "iter_labels",
    "next_label",
    "parse_label",
    "reset_cursor",
]
