"""Viewport coordinate engine: cursor movement and minimal scrolling."""

from .state import Cursor, Direction, ViewportSnapshot, ViewportState
from .validation import ViewportValidationError, ensure_invariants

__all__ = [
    "Cursor",
    "Direction",
    "ViewportSnapshot",
    "ViewportState",
    "ViewportValidationError",
    "ensure_invariants",
]
