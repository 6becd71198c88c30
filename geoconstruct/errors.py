"""Exceptions raised for programming errors in the construction engine.

Geometric degeneracies never raise; they produce empty results. These
exceptions signal misuse of the store or controller APIs.
"""

from __future__ import annotations

from typing import Iterable


class ConstructionError(RuntimeError):
    """Base class for construction engine failures."""


class DanglingReferenceError(ConstructionError):
    """Raised when a line or circle references a point id the store does not hold."""

    def __init__(self, kind: str, missing: Iterable[int]):
        self.kind = kind
        self.missing = tuple(sorted(set(missing)))
        ids = ", ".join(str(pid) for pid in self.missing)
        super().__init__(f"{kind} references unknown point id(s): {ids}")


class SelectionError(ConstructionError):
    """Raised when a selection is too long or names unknown points."""


class UnknownToolError(ValueError):
    """Raised when an action names a tool outside ``line``/``extend``/``circle``."""

    def __init__(self, name: object):
        self.name = name
        super().__init__(f"unknown tool {name!r} (expected line, extend or circle)")
