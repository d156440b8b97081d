"""Session-level actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ActionContext, ActionResult

if TYPE_CHECKING:
    from pound_viewer.keymaps.resolver import ResolutionMatch


def quit_viewer(context: ActionContext, match: "ResolutionMatch") -> ActionResult:
    del context, match
    return ActionResult(terminate=True, status="quit")


__all__ = ["quit_viewer"]
