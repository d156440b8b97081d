from __future__ import annotations

from typing import List, Sequence

import pytest

from pound_viewer.adapters.textual import (
    HostSurface,
    TextualUIHooks,
    TextualViewerAdapter,
    normalize_textual_key,
)
from pound_viewer.buffer import Document
from pound_viewer.session import LoopState


class Recorder:
    def __init__(self) -> None:
        self.views: List[Sequence[str]] = []
        self.statuses: List[str] = []
        self.logs: List[str] = []
        self.quit_requests = 0

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_view=self.views.append,
            update_status=self.statuses.append,
            request_quit=self._quit,
            log=self.logs.append,
        )

    def _quit(self) -> None:
        self.quit_requests += 1


def make_adapter(
    *lines: str, columns: int = 20, rows: int = 4, name: str | None = "notes.txt"
) -> tuple[TextualViewerAdapter, Recorder]:
    recorder = Recorder()
    document = Document.from_lines(lines, name=name)
    adapter = TextualViewerAdapter(
        document, recorder.hooks(), columns=columns, rows=rows
    )
    return adapter, recorder


@pytest.mark.parametrize(
    ("key", "token"),
    [
        ("up", "up"),
        ("home", "home"),
        ("ctrl+q", "ctrl+q"),
        ("shift+up", "shift+up"),
        ("page_up", "pageup"),
        ("x", "x"),
        ("X", "X"),
        ("hyper+x", "unknown"),
    ],
)
def test_normalize_textual_key(key: str, token: str) -> None:
    assert normalize_textual_key(key).token == token


def test_adapter_renders_initial_view() -> None:
    adapter, recorder = make_adapter("abc", "de")

    assert recorder.views[-1] == ["abc", "de", "~", "~"]
    assert recorder.statuses[-1] == "notes.txt - 2 lines | Ln 1, Col 1"
    assert adapter.state is LoopState.RUNNING


def test_adapter_moves_cursor_and_updates_status() -> None:
    adapter, recorder = make_adapter("abc", "de", "fghij")

    adapter.handle_textual_key("end")
    adapter.handle_textual_key("right")

    assert adapter.session.viewport.cursor == (2, 1)
    assert recorder.statuses[-1] == "notes.txt - 3 lines | Ln 3, Col 2"
    assert any(line.startswith("key -> ") for line in recorder.logs)


def test_adapter_scrolls_view() -> None:
    adapter, recorder = make_adapter(*[f"line {i}" for i in range(10)], rows=3)

    for _ in range(4):
        adapter.handle_textual_key("down")

    assert recorder.views[-1] == ["line 2", "line 3", "line 4"]
    assert adapter.surface.last_frame.startswith("\x1b[?25l")


def test_adapter_requests_quit() -> None:
    adapter, recorder = make_adapter("abc")

    state = adapter.handle_textual_key("ctrl+q")

    assert state is LoopState.TERMINATED
    assert recorder.quit_requests == 1


def test_adapter_status_for_unnamed_document() -> None:
    adapter, _ = make_adapter(name=None)

    assert adapter.status_text() == "[No Name] - 0 lines | Ln 1, Col 1"


def test_host_surface_rejects_blocking_reads() -> None:
    surface = HostSurface(10, 5)

    assert surface.size() == (10, 5)
    with pytest.raises(RuntimeError):
        surface.read_key()
