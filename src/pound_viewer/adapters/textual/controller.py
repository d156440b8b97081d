"""Textual-independent controller that drives a viewer session from UI events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

from pound_viewer.buffer import Document
from pound_viewer.keymaps import DEFAULT_QUIT_KEY, KeyStroke
from pound_viewer.session import LoopState, ViewerSession
from pound_viewer.terminal import UNKNOWN_KEY

# Textual spells a few keys differently from the terminal decoder.
_TEXTUAL_ALIASES: Dict[str, str] = {
    "page_up": "pageup",
    "page_down": "pagedown",
    "return": "enter",
}
_TEXTUAL_MODIFIERS: Dict[str, str] = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "alt": "alt",
    "meta": "alt",
    "shift": "shift",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class HostSurface:
    """Stand-in terminal for hosts that deliver keys as events."""

    def __init__(self, columns: int, rows: int) -> None:
        self.columns = columns
        self.rows = rows
        self.last_frame = ""

    def size(self) -> Tuple[int, int]:
        return (self.columns, self.rows)

    def write(self, data: str) -> None:
        self.last_frame = data

    def read_key(self) -> KeyStroke:
        raise RuntimeError("keys are delivered by the host event loop")


def normalize_textual_key(key: str) -> KeyStroke:
    """Translate a Textual ``event.key`` such as ``ctrl+q`` into a stroke."""

    if len(key) == 1:
        return KeyStroke(key)
    *modifiers, name = key.split("+")
    mapped = []
    for modifier in modifiers:
        normalized = _TEXTUAL_MODIFIERS.get(modifier.lower())
        if normalized is None:
            return KeyStroke(UNKNOWN_KEY)
        mapped.append(normalized)
    if not name:
        return KeyStroke(UNKNOWN_KEY)
    name = _TEXTUAL_ALIASES.get(name.lower(), name)
    return KeyStroke(name, tuple(mapped))


class TextualViewerAdapter:
    """Bridges Textual key events to a ``ViewerSession``."""

    def __init__(
        self,
        document: Document,
        hooks: TextualUIHooks,
        *,
        columns: int,
        rows: int,
        quit_key: str = DEFAULT_QUIT_KEY,
    ) -> None:
        self.hooks = hooks
        self.surface = HostSurface(columns, rows)
        self.session = ViewerSession(document, self.surface, quit_key=quit_key)
        self._refresh()

    @property
    def state(self) -> LoopState:
        return self.session.state

    def handle_textual_key(self, key: str) -> LoopState:
        stroke = normalize_textual_key(key)
        self._log_state("key ->", key=key, token=stroke.token)
        state = self.session.process_keypress(stroke)
        if state is LoopState.TERMINATED:
            self.hooks.request_quit()
            return state
        self._refresh()
        return state

    def status_text(self) -> str:
        document = self.session.document
        row, col = self.session.viewport.cursor
        name = document.name or "[No Name]"
        return f"{name} - {document.line_count()} lines | Ln {row + 1}, Col {col + 1}"

    def _refresh(self) -> None:
        self.session.refresh_screen()
        self.hooks.update_view(self.session.renderer.visible_rows())
        self.hooks.update_status(self.status_text())

    def _log_state(self, prefix: str, **fields: object) -> None:
        viewport = self.session.viewport
        snapshot: Dict[str, object] = {
            "cursor": viewport.cursor,
            "offset": (viewport.row_offset, viewport.col_offset),
        }
        snapshot.update(fields)
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = [
    "HostSurface",
    "TextualUIHooks",
    "TextualViewerAdapter",
    "normalize_textual_key",
]
