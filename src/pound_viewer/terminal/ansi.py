"""ANSI/VT escape sequences used to draw frames."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[2J"
CLEAR_LINE_TO_END = "\x1b[K"
CURSOR_HOME = "\x1b[H"
NEWLINE = "\r\n"

_MOVE_TO_FMT = "\x1b[{};{}H"


def move_to(column: int, row: int) -> str:
    """Position the cursor at zero-based ``(column, row)``."""

    if column < 0 or row < 0:
        raise ValueError(f"cursor position must be non-negative, got {(column, row)}")
    return _MOVE_TO_FMT.format(row + 1, column + 1)


__all__ = [
    "CLEAR_LINE_TO_END",
    "CLEAR_SCREEN",
    "CURSOR_HOME",
    "HIDE_CURSOR",
    "NEWLINE",
    "SHOW_CURSOR",
    "move_to",
]
