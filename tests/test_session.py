from __future__ import annotations

import string
from collections import deque
from typing import Iterable, List, Tuple

import pytest

from pound_viewer.buffer import Document
from pound_viewer.config import ViewerConfig
from pound_viewer.keymaps import (
    RESERVED_QUIT_KEYS,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeySequence,
    KeyStroke,
    load_default_keymaps,
)
from pound_viewer.session import LoopState, ViewerSession, build_keymaps
from pound_viewer.terminal import TerminalError, ansi, decode_key

QUIT = KeyStroke("q", ("ctrl",))


class ScriptedTerminal:
    """In-memory terminal fed from a list of raw input sequences."""

    def __init__(
        self, keys: Iterable[str] = (), *, columns: int = 80, rows: int = 24
    ) -> None:
        self.columns = columns
        self.rows = rows
        self.keys = deque(keys)
        self.writes: List[str] = []

    def size(self) -> Tuple[int, int]:
        return (self.columns, self.rows)

    def write(self, data: str) -> None:
        self.writes.append(data)

    def read_key(self) -> KeyStroke:
        if not self.keys:
            raise TerminalError("standard input closed")
        return decode_key(self.keys.popleft())


def make_session(
    *lines: str, keys: Iterable[str] = (), columns: int = 80, rows: int = 24, **kwargs
) -> ViewerSession:
    terminal = ScriptedTerminal(keys, columns=columns, rows=rows)
    return ViewerSession(Document.from_lines(lines), terminal, **kwargs)


UP, DOWN, RIGHT, LEFT = "\x1b[A", "\x1b[B", "\x1b[C", "\x1b[D"
HOME, END = "\x1b[H", "\x1b[F"
CTRL_Q = "\x11"


def test_build_keymaps_registers_defaults() -> None:
    registry, resolver = build_keymaps()

    assert registry.stats().binding_count == 7
    assert resolver.registry is registry


def test_run_until_quit() -> None:
    session = make_session("abc", "de", "fghij", keys=[DOWN, DOWN, END, CTRL_Q])

    assert session.run() is LoopState.TERMINATED
    assert session.viewport.cursor == (2, 0)
    assert session.frames == 4


def test_right_walks_to_end_then_wraps_past_last_line() -> None:
    session = make_session("abc", "de", "fghij")
    session.viewport.cursor_row = 2

    for _ in range(5):
        session.process_keypress(decode_key(RIGHT))
    assert session.viewport.cursor == (2, 5)

    session.process_keypress(decode_key(RIGHT))
    assert session.viewport.cursor == (3, 0)


def test_unbound_keys_are_ignored() -> None:
    session = make_session("abc", keys=["x", "\x1b[5~", "\x1b[1;2A", RIGHT, CTRL_Q])

    session.run()

    assert session.viewport.cursor == (0, 1)
    assert session.state is LoopState.TERMINATED


def test_quit_key_is_configurable() -> None:
    session = make_session("abc", quit_key="x")

    assert session.process_keypress(QUIT) is LoopState.RUNNING
    assert session.process_keypress(KeyStroke("x", ("ctrl",))) is LoopState.TERMINATED


def test_multi_stroke_binding_waits_for_completion() -> None:
    registry = load_default_keymaps(
        KeymapRegistry(),
        extra_bindings=[
            Binding(
                id="view.gg",
                sequence=KeySequence.from_strings("g", "g"),
                action_id="cursor.home",
            )
        ],
    )
    session = make_session(
        "abc", "de", "fghij", resolver=KeymapResolver(registry)
    )
    session.process_keypress(decode_key(END))
    assert session.viewport.cursor == (2, 0)

    session.process_keypress(KeyStroke("g"))
    assert session.viewport.cursor == (2, 0)

    session.process_keypress(KeyStroke("g"))
    assert session.viewport.cursor == (0, 0)


def test_abandoned_prefix_replays_stroke() -> None:
    registry = load_default_keymaps(
        KeymapRegistry(),
        extra_bindings=[
            Binding(
                id="view.gg",
                sequence=KeySequence.from_strings("g", "g"),
                action_id="cursor.home",
            )
        ],
    )
    session = make_session("abc", "de", resolver=KeymapResolver(registry))

    session.process_keypress(KeyStroke("g"))
    session.process_keypress(decode_key(DOWN))

    assert session.viewport.cursor == (1, 0)


def test_each_frame_is_one_write() -> None:
    session = make_session("abc", "de", keys=[DOWN, CTRL_Q], columns=10, rows=3)

    session.run()

    writes = session.terminal.writes
    assert len(writes) == 2
    assert all(write.startswith(ansi.HIDE_CURSOR) for write in writes)
    assert writes[1].endswith(ansi.move_to(0, 1) + ansi.SHOW_CURSOR)


def test_refresh_scrolls_before_rendering() -> None:
    session = make_session(*[f"row {i}" for i in range(10)], columns=10, rows=3)
    for _ in range(5):
        session.process_keypress(decode_key(DOWN))

    session.refresh_screen()

    assert session.viewport.row_offset == 3
    frame = session.terminal.writes[-1]
    assert "row 3" in frame and "row 5" in frame and "row 2" not in frame
    assert frame.endswith(ansi.move_to(0, 2) + ansi.SHOW_CURSOR)


def test_empty_document_shows_welcome_and_quits() -> None:
    session = make_session(keys=[DOWN, END, CTRL_Q], columns=60, rows=12)

    session.run()

    assert session.viewport.cursor == (0, 0)
    assert "Pound Viewer" in session.terminal.writes[0]


def test_step_reports_loop_state() -> None:
    session = make_session("abc", keys=[RIGHT, CTRL_Q])

    assert session.step() is True
    assert session.step() is False


def test_read_errors_propagate() -> None:
    session = make_session("abc", keys=[])

    with pytest.raises(TerminalError):
        session.run()


@pytest.mark.parametrize("letter", string.ascii_lowercase)
def test_quit_chord_raw_byte_ends_session(letter: str) -> None:
    control_byte = chr(ord(letter) - ord("a") + 1)

    if letter in RESERVED_QUIT_KEYS:
        with pytest.raises(ValueError):
            make_session("abc", quit_key=letter)
        with pytest.raises(ValueError):
            ViewerConfig(quit_key=letter)
        return

    session = make_session("abc", "de", quit_key=letter)
    assert session.process_keypress(decode_key(control_byte)) is LoopState.TERMINATED


def test_actions_report_whether_cursor_moved() -> None:
    session = make_session("abc", "de")
    registry = session.resolver.registry
    left = registry.get_action("cursor.left")
    down = registry.get_action("cursor.down")

    assert left(session.context, None).status == "noop"
    assert down(session.context, None).status == "moved"
    assert session.viewport.cursor == (1, 0)
    assert registry.get_action("core.quit")(session.context, None).terminate
