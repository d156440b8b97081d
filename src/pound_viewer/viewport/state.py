"""Cursor position, scroll offsets, and the algorithms that move them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from pound_viewer.buffer import Document

Cursor = Tuple[int, int]  # (row, column) in document coordinates


class Direction(Enum):
    """Navigation commands understood by ``ViewportState.move_cursor``."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


@dataclass(frozen=True, slots=True)
class ViewportSnapshot:
    """Immutable copy of the viewport for hosts and log records."""

    screen_columns: int
    screen_rows: int
    cursor: Cursor
    row_offset: int
    col_offset: int

    @property
    def screen_cursor(self) -> Tuple[int, int]:
        row, col = self.cursor
        return (col - self.col_offset, row - self.row_offset)


class ViewportState:
    """Screen size, logical cursor, and the first visible row/column.

    Mutated only through ``move_cursor`` and ``scroll``. Screen dimensions are
    fixed at construction.
    """

    def __init__(
        self, document: Document, *, screen_columns: int, screen_rows: int
    ) -> None:
        if screen_columns <= 0 or screen_rows <= 0:
            raise ValueError(
                f"screen size must be positive, got {screen_columns}x{screen_rows}"
            )
        self.document = document
        self.screen_columns = screen_columns
        self.screen_rows = screen_rows
        self.cursor_row = 0
        self.cursor_col = 0
        self.row_offset = 0
        self.col_offset = 0

    @property
    def cursor(self) -> Cursor:
        return (self.cursor_row, self.cursor_col)

    def screen_cursor(self) -> Tuple[int, int]:
        """Cursor position relative to the visible grid as ``(x, y)``."""

        return (self.cursor_col - self.col_offset, self.cursor_row - self.row_offset)

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(
            screen_columns=self.screen_columns,
            screen_rows=self.screen_rows,
            cursor=self.cursor,
            row_offset=self.row_offset,
            col_offset=self.col_offset,
        )

    def move_cursor(self, direction: Direction) -> None:
        if not isinstance(direction, Direction):
            raise ValueError(f"Unknown direction {direction!r}")

        line_count = self.document.line_count()
        if direction is Direction.UP:
            if self.cursor_row > 0:
                self.cursor_row -= 1
        elif direction is Direction.DOWN:
            # One row past the last line is a valid resting place.
            if self.cursor_row < line_count:
                self.cursor_row += 1
        elif direction is Direction.LEFT:
            if self.cursor_col > 0:
                self.cursor_col -= 1
            elif self.cursor_row > 0:
                self.cursor_row -= 1
                self.cursor_col = len(self.document.line_at(self.cursor_row))
        elif direction is Direction.RIGHT:
            if self.cursor_row < line_count:
                length = len(self.document.line_at(self.cursor_row))
                if self.cursor_col < length:
                    self.cursor_col += 1
                elif self.cursor_col == length:
                    self.cursor_row += 1
                    self.cursor_col = 0
        elif direction is Direction.HOME:
            self.cursor_row = 0
        elif direction is Direction.END:
            self.cursor_row = max(line_count - 1, 0)

        self.cursor_col = min(
            self.cursor_col, self.document.line_length(self.cursor_row)
        )

    def scroll(self) -> bool:
        """Shift the offsets just far enough to keep the cursor visible.

        Returns ``True`` when either offset changed.
        """

        before = (self.row_offset, self.col_offset)

        self.col_offset = min(self.col_offset, self.cursor_col)
        if self.cursor_col >= self.col_offset + self.screen_columns:
            self.col_offset = self.cursor_col - self.screen_columns + 1

        self.row_offset = min(self.row_offset, self.cursor_row)
        if self.cursor_row >= self.row_offset + self.screen_rows:
            self.row_offset = self.cursor_row - self.screen_rows + 1

        return (self.row_offset, self.col_offset) != before


__all__ = ["Cursor", "Direction", "ViewportSnapshot", "ViewportState"]
