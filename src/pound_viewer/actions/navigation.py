"""Cursor navigation actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pound_viewer.runtime import telemetry
from pound_viewer.viewport import Direction

from .base import ActionContext, ActionResult

if TYPE_CHECKING:
    from pound_viewer.keymaps.resolver import ResolutionMatch


def _move(context: ActionContext, direction: Direction) -> ActionResult:
    viewport = context.viewport
    before = viewport.cursor
    with telemetry.span(
        "viewport::move",
        component="viewport",
        metadata={"direction": direction.value, "from": before},
    ) as handle:
        viewport.move_cursor(direction)
        handle.add_metadata("to", viewport.cursor)
    status = "moved" if viewport.cursor != before else "noop"
    return ActionResult(status=status)


def cursor_up(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.UP)


def cursor_down(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.DOWN)


def cursor_left(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.LEFT)


def cursor_right(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del match
    return _move(context, Direction.RIGHT)


def cursor_home(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    """Jump to the first document row (vertical, not start of line)."""
    del match
    return _move(context, Direction.HOME)


def cursor_end(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    """Jump to the last document row (vertical, not end of line)."""
    del match
    return _move(context, Direction.END)


__all__ = [
    "cursor_down",
    "cursor_end",
    "cursor_home",
    "cursor_left",
    "cursor_right",
    "cursor_up",
]
