"""Textual app that hosts the viewer instead of the raw terminal loop."""

from __future__ import annotations

from typing import Sequence

try:  # pragma: no cover - imported only when the Textual host is selected
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use pound_viewer.adapters.textual.app"
    ) from exc

from pound_viewer.buffer import Document
from pound_viewer.keymaps import DEFAULT_QUIT_KEY
from pound_viewer.runtime import telemetry

from .controller import TextualUIHooks, TextualViewerAdapter


class PoundViewerApp(App[None]):
    """Full-screen viewport plus a one-line status bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#viewport {
		height: 1fr;
		width: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}
	"""

    def __init__(self, document: Document, *, quit_key: str = DEFAULT_QUIT_KEY) -> None:
        super().__init__()
        self.document = document
        self.quit_key = quit_key
        self.adapter: TextualViewerAdapter | None = None
        self._logger = telemetry.get_logger("pound_viewer.textual")

    def compose(self) -> ComposeResult:
        yield Static("", id="viewport", markup=False)
        yield Static("", id="status-line", markup=False)

    def on_mount(self) -> None:
        # Screen size is fixed once, like the terminal host.
        columns = max(self.size.width, 1)
        rows = max(self.size.height - 1, 1)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            request_quit=self.exit,
            log=self._logger.debug,
        )
        self.adapter = TextualViewerAdapter(
            self.document,
            hooks,
            columns=columns,
            rows=rows,
            quit_key=self.quit_key,
        )

    def on_key(self, event: events.Key) -> None:
        if self.adapter is None:
            return
        self.adapter.handle_textual_key(event.key)
        event.stop()

    def _update_view(self, rows: Sequence[str]) -> None:
        self.query_one("#viewport", Static).update("\n".join(rows))

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)


def run_textual(document: Document, *, quit_key: str = DEFAULT_QUIT_KEY) -> None:
    PoundViewerApp(document, quit_key=quit_key).run()


__all__ = ["PoundViewerApp", "run_textual"]
