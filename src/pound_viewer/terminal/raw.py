"""Raw-mode terminal backed by ``sys.stdin``/``sys.stdout``.

``RawTerminal`` is a context manager: entering saves the termios attributes
and switches stdin to raw mode; leaving restores them and clears the screen
on every exit path, exceptions included.
"""

from __future__ import annotations

import codecs
import os
import select
import shutil
import sys
import termios
import tty
from collections import deque
from typing import Any, Deque, Optional, Protocol, TextIO, Tuple

from pound_viewer.keymaps import KeyStroke
from pound_viewer.runtime import telemetry

from . import ansi
from .keys import decode_key, split_pending, split_sequences

DEFAULT_POLL_MS = 500
_READ_CHUNK = 1024


class TerminalError(RuntimeError):
    """Raised when raw mode cannot be entered or restored."""


class Terminal(Protocol):
    """Interface the session loop needs from a terminal."""

    def size(self) -> Tuple[int, int]: ...

    def read_key(self) -> KeyStroke: ...

    def write(self, data: str) -> None: ...


class RawTerminal:
    """Concrete terminal: raw mode, polled key reads, single-write frames."""

    def __init__(
        self,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        poll_ms: int = DEFAULT_POLL_MS,
    ) -> None:
        if poll_ms <= 0:
            raise ValueError("poll_ms must be positive")
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._poll_seconds = poll_ms / 1000.0
        self._original_termios: Optional[list[Any]] = None
        self._pending: Deque[str] = deque()
        self._partial = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> "RawTerminal":
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self.write(ansi.SHOW_CURSOR + ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)
        finally:
            self.disable_raw_mode()
        return False

    # -- raw mode -----------------------------------------------------------

    def enable_raw_mode(self) -> None:
        fd = self._fileno(self._stdin)
        if not os.isatty(fd):
            raise TerminalError("standard input is not a terminal")
        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as exc:
            raise TerminalError(f"could not enable raw mode: {exc}") from exc
        telemetry.record_event("terminal.raw_mode", data={"enabled": True})

    def disable_raw_mode(self) -> None:
        if self._original_termios is None:
            return
        fd = self._fileno(self._stdin)
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
        except termios.error as exc:
            raise TerminalError(f"could not restore terminal mode: {exc}") from exc
        finally:
            self._original_termios = None
        telemetry.record_event("terminal.raw_mode", data={"enabled": False})

    @property
    def raw_mode(self) -> bool:
        return self._original_termios is not None

    # -- Terminal protocol --------------------------------------------------

    def size(self) -> Tuple[int, int]:
        """Return ``(columns, rows)``, falling back to 80x24."""

        size = shutil.get_terminal_size(fallback=(80, 24))
        return max(size.columns, 1), max(size.lines, 1)

    def write(self, data: str) -> None:
        self._stdout.write(data)
        self._stdout.flush()

    def read_key(self) -> KeyStroke:
        """Block until a key arrives, polling so the wait stays interruptible."""

        fd = self._fileno(self._stdin)
        while not self._pending:
            ready, _, _ = select.select([fd], [], [], self._poll_seconds)
            if not ready:
                # A quiet poll means a held-back prefix was a key of its own.
                if self._partial:
                    self._pending.extend(split_sequences(self._partial))
                    self._partial = ""
                continue
            try:
                raw = os.read(fd, _READ_CHUNK)
            except OSError as exc:
                # A pty whose other end has gone away reports EIO.
                raise TerminalError("standard input closed") from exc
            if not raw:
                raise TerminalError("standard input closed")
            keys, self._partial = split_pending(self._partial + self._decoder.decode(raw))
            self._pending.extend(keys)
        return decode_key(self._pending.popleft())

    @staticmethod
    def _fileno(stream: TextIO) -> int:
        try:
            return stream.fileno()
        except (AttributeError, ValueError, OSError) as exc:
            raise TerminalError("stream has no usable file descriptor") from exc


__all__ = ["DEFAULT_POLL_MS", "RawTerminal", "Terminal", "TerminalError"]
