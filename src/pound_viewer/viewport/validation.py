"""Invariant checks for viewport state."""

from __future__ import annotations

from typing import Optional

from .state import Cursor, ViewportState


class ViewportValidationError(RuntimeError):
    """Raised when the cursor and offsets fall out of agreement."""

    def __init__(self, message: str, *, cursor: Optional[Cursor] = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_invariants(state: ViewportState) -> ViewportState:
    document = state.document
    row, col = state.cursor
    if state.row_offset < 0 or state.col_offset < 0:
        raise ViewportValidationError("Negative scroll offset", cursor=state.cursor)

    if not document.is_empty and not (
        state.col_offset <= col < state.col_offset + state.screen_columns
    ):
        raise ViewportValidationError(
            "Cursor column outside visible window", cursor=state.cursor
        )

    if not state.row_offset <= row < state.row_offset + state.screen_rows:
        raise ViewportValidationError(
            "Cursor row outside visible window", cursor=state.cursor
        )

    if row < document.line_count():
        if not 0 <= col <= len(document.line_at(row)):
            raise ViewportValidationError("Column out of range", cursor=state.cursor)
    elif col != 0:
        raise ViewportValidationError(
            "Column must be 0 past the last line", cursor=state.cursor
        )
    return state
