"""Read-only document storage for the viewer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from pound_viewer.runtime import telemetry

from .errors import DocumentLoadError

PathLike = Union[str, "os.PathLike[str]"]


def split_lines(text: str) -> Tuple[str, ...]:
    """Split ``text`` into lines without their terminators.

    A trailing newline does not open an extra empty line, empty text has no
    lines at all, and a ``\\r`` left over from ``\\r\\n`` endings is dropped.
    """

    if not text:
        return ()
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return tuple(part[:-1] if part.endswith("\r") else part for part in parts)


@dataclass(frozen=True, slots=True)
class Document:
    """Ordered, immutable sequence of text lines.

    The line count never changes during a session; ``line_at`` expects a row
    that the caller already checked against ``line_count()``.
    """

    lines: Tuple[str, ...] = ()
    name: Optional[str] = None

    @classmethod
    def empty(cls) -> "Document":
        return cls()

    @classmethod
    def from_text(cls, text: str, *, name: Optional[str] = None) -> "Document":
        return cls(lines=split_lines(text), name=name)

    @classmethod
    def from_lines(
        cls, lines: Sequence[str], *, name: Optional[str] = None
    ) -> "Document":
        return cls(lines=tuple(lines), name=name)

    @classmethod
    def open(
        cls,
        path: PathLike,
        *,
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> "Document":
        """Load ``path`` into memory, raising ``DocumentLoadError`` on failure."""

        display = os.fspath(path)
        try:
            with open(display, "rb") as handle:
                raw = handle.read()
            text = raw.decode(encoding, errors=errors)
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else exc
            raise DocumentLoadError(str(reason), path=display) from exc

        document = cls.from_text(text, name=display)
        telemetry.record_event(
            "document.loaded",
            data={
                "path": display,
                "lines": document.line_count(),
                "bytes": len(raw),
            },
        )
        return document

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, row: int) -> str:
        if row < 0:
            raise IndexError(f"row {row} is negative")
        return self.lines[row]

    def line_length(self, row: int) -> int:
        """Length of ``row``, or 0 when the row lies outside the document."""

        if 0 <= row < len(self.lines):
            return len(self.lines[row])
        return 0


__all__ = ["Document", "split_lines"]
