"""Built-in actions and bindings: six navigation keys plus the quit chord."""

from __future__ import annotations

from typing import Iterable

from pound_viewer.actions import core as core_actions
from pound_viewer.actions import navigation as navigation_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_QUIT_KEY = "q"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.quit",
        handler=core_actions.quit_viewer,
        description="Quit the viewer",
    ),
    ActionRef(
        id="cursor.up",
        handler=navigation_actions.cursor_up,
        description="Move the cursor up one row",
    ),
    ActionRef(
        id="cursor.down",
        handler=navigation_actions.cursor_down,
        description="Move the cursor down one row",
    ),
    ActionRef(
        id="cursor.left",
        handler=navigation_actions.cursor_left,
        description="Move left, wrapping to the end of the previous line",
    ),
    ActionRef(
        id="cursor.right",
        handler=navigation_actions.cursor_right,
        description="Move right, wrapping to the start of the next line",
    ),
    ActionRef(
        id="cursor.home",
        handler=navigation_actions.cursor_home,
        description="Jump to the first row",
    ),
    ActionRef(
        id="cursor.end",
        handler=navigation_actions.cursor_end,
        description="Jump to the last row",
    ),
)

NAVIGATION_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=f"view.{key}",
        sequence=KeySequence.from_strings(key),
        action_id=f"cursor.{key}",
        description=f"Navigate: {key}",
    )
    for key in ("up", "down", "left", "right", "home", "end")
)


# Ctrl+H, Ctrl+I, Ctrl+J and Ctrl+M arrive as backspace, tab and enter bytes.
RESERVED_QUIT_KEYS = frozenset("hijm")


def validate_quit_key(letter: str) -> str:
    """Return ``letter`` lowercased if Ctrl+``letter`` can serve as the quit chord."""

    if len(letter) != 1 or not letter.isascii() or not letter.isalpha():
        raise ValueError(f"quit key must be a single ASCII letter, got {letter!r}")
    letter = letter.lower()
    if letter in RESERVED_QUIT_KEYS:
        raise ValueError(
            f"Ctrl+{letter.upper()} is indistinguishable from another key "
            f"in a terminal; choose a letter other than h, i, j or m"
        )
    return letter


def quit_binding(letter: str = DEFAULT_QUIT_KEY) -> Binding:
    """Binding for the Ctrl+``letter`` quit chord."""

    return Binding(
        id="view.quit",
        sequence=KeySequence.from_strings(f"ctrl+{validate_quit_key(letter)}"),
        action_id="core.quit",
        description="Quit",
    )


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    quit_key: str = DEFAULT_QUIT_KEY,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
) -> KeymapRegistry:
    """Register built-in actions and bindings."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in (*NAVIGATION_BINDINGS, quit_binding(quit_key)):
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)
    return registry


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_QUIT_KEY",
    "NAVIGATION_BINDINGS",
    "RESERVED_QUIT_KEYS",
    "load_default_keymaps",
    "quit_binding",
    "validate_quit_key",
]
