"""Input loop: render, wait for a key, dispatch it, repeat until quit."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pound_viewer.actions import ActionContext, ActionResult
from pound_viewer.buffer import Document
from pound_viewer.keymaps import (
    DEFAULT_QUIT_KEY,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    load_default_keymaps,
)
from pound_viewer.render import FrameRenderer
from pound_viewer.runtime import telemetry
from pound_viewer.terminal import Terminal
from pound_viewer.viewport import ViewportState, ensure_invariants

KEYMAP_LOGGER = "pound_viewer.keymaps"


class LoopState(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


def build_keymaps(
    quit_key: str = DEFAULT_QUIT_KEY,
) -> Tuple[KeymapRegistry, KeymapResolver]:
    """Registry seeded with the default bindings, plus its resolver."""

    registry = KeymapRegistry(logger_name=KEYMAP_LOGGER)
    load_default_keymaps(registry, quit_key=quit_key)
    return registry, KeymapResolver(registry, logger_name=KEYMAP_LOGGER)


class ViewerSession:
    """Owns the document, viewport, renderer and keymap for one run.

    Everything is single-threaded; the only suspension point is
    ``terminal.read_key()``.
    """

    def __init__(
        self,
        document: Document,
        terminal: Terminal,
        *,
        quit_key: str = DEFAULT_QUIT_KEY,
        resolver: Optional[KeymapResolver] = None,
        screen_size: Optional[Tuple[int, int]] = None,
    ) -> None:
        columns, rows = screen_size or terminal.size()
        self.document = document
        self.terminal = terminal
        self.viewport = ViewportState(
            document, screen_columns=columns, screen_rows=rows
        )
        self.renderer = FrameRenderer(document, self.viewport)
        self.resolver = resolver or build_keymaps(quit_key)[1]
        self.context = ActionContext(document=document, viewport=self.viewport)
        self.state = LoopState.RUNNING
        self.frames = 0
        self._pending: List[str] = []

    def refresh_screen(self) -> int:
        """Scroll, validate, render and flush one frame; returns its length."""

        viewport = self.viewport
        if viewport.scroll():
            telemetry.record_event(
                "viewport.scrolled",
                level="debug",
                data={"row_offset": viewport.row_offset, "col_offset": viewport.col_offset},
            )
        ensure_invariants(viewport)
        written = self.renderer.render_frame().flush(self.terminal)
        self.frames += 1
        return written

    def process_keypress(self, stroke: KeyStroke) -> LoopState:
        tokens = (*self._pending, stroke.token)
        result = self.resolver.resolve(tokens)

        if result.status == "pending":
            self._pending = list(tokens)
            return self.state

        if result.status == "miss" or result.match is None:
            if self._pending:
                # Abandon the unfinished prefix and try the stroke on its own.
                self._pending = []
                return self.process_keypress(stroke)
            return self.state

        self._pending = []
        outcome = result.match.action(self.context, result.match)
        if not isinstance(outcome, ActionResult):
            return self.state
        telemetry.record_event(
            "action.dispatched",
            level="debug",
            data={"action": result.match.action.id, "status": outcome.status},
        )
        if outcome.terminate:
            self.state = LoopState.TERMINATED
            telemetry.record_event(
                "session.quit",
                data={"frames": self.frames, "cursor": self.viewport.cursor},
            )
        return self.state

    def step(self) -> bool:
        """Run one iteration; returns ``False`` once the loop has terminated."""

        self.refresh_screen()
        stroke = self.terminal.read_key()
        return self.process_keypress(stroke) is LoopState.RUNNING

    def run(self) -> LoopState:
        telemetry.record_event(
            "session.start",
            data={
                "document": self.document.name or "<unnamed>",
                "lines": self.document.line_count(),
                "screen": (self.viewport.screen_columns, self.viewport.screen_rows),
            },
        )
        while self.state is LoopState.RUNNING:
            self.step()
        return self.state


__all__ = ["LoopState", "ViewerSession", "build_keymaps"]
