"""Growable output buffer flushed to the terminal in one write."""

from __future__ import annotations

from typing import List, Protocol


class FrameSink(Protocol):
    """Anything that accepts a fully assembled frame."""

    def write(self, data: str) -> None: ...


class FrameBuffer:
    """Accumulates escape sequences and text for a single redraw."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def append(self, text: str) -> "FrameBuffer":
        if text:
            self._parts.append(text)
        return self

    def getvalue(self) -> str:
        return "".join(self._parts)

    def clear(self) -> None:
        self._parts.clear()

    def flush(self, sink: FrameSink) -> int:
        """Write everything to ``sink`` in one call, then empty the buffer."""

        data = self.getvalue()
        sink.write(data)
        self.clear()
        return len(data)

    def __len__(self) -> int:
        return sum(len(part) for part in self._parts)


__all__ = ["FrameBuffer", "FrameSink"]
