"""Frame assembly: turns document + viewport into one terminal redraw."""

from __future__ import annotations

from typing import List

from pound_viewer import __version__
from pound_viewer.buffer import Document
from pound_viewer.runtime.telemetry import span
from pound_viewer.terminal import ansi
from pound_viewer.viewport import ViewportState

from .frame import FrameBuffer

PLACEHOLDER = "~"
WELCOME_TITLE = f"Pound Viewer --- Version {__version__}"


def welcome_banner(screen_columns: int, title: str = WELCOME_TITLE) -> str:
    """Return the centered banner row shown for an empty document."""

    title = title[:screen_columns]
    padding = (screen_columns - len(title)) // 2
    if padding > 0:
        return PLACEHOLDER + " " * (padding - 1) + title
    return title


def visible_slice(line: str, col_offset: int, screen_columns: int) -> str:
    visible_len = min(max(len(line) - col_offset, 0), screen_columns)
    if visible_len == 0:
        return ""
    return line[col_offset : col_offset + visible_len]


class FrameRenderer:
    """Reads the document and viewport once per frame and builds the output."""

    def __init__(self, document: Document, viewport: ViewportState) -> None:
        self.document = document
        self.viewport = viewport
        self._frame = FrameBuffer()

    def row_text(self, screen_row: int) -> str:
        """Plain content of one screen row, without escape sequences."""

        viewport = self.viewport
        document_row = screen_row + viewport.row_offset
        if document_row >= self.document.line_count():
            if self.document.is_empty and screen_row == viewport.screen_rows // 3:
                return welcome_banner(viewport.screen_columns)
            return PLACEHOLDER
        return visible_slice(
            self.document.line_at(document_row),
            viewport.col_offset,
            viewport.screen_columns,
        )

    def visible_rows(self) -> List[str]:
        return [self.row_text(i) for i in range(self.viewport.screen_rows)]

    def render_frame(self) -> FrameBuffer:
        viewport = self.viewport
        frame = self._frame
        frame.clear()
        with span(
            "render::frame",
            component="render",
            metadata={
                "cursor": viewport.cursor,
                "offset": (viewport.row_offset, viewport.col_offset),
            },
        ):
            frame.append(ansi.HIDE_CURSOR)
            frame.append(ansi.CLEAR_SCREEN)
            frame.append(ansi.CURSOR_HOME)
            last_row = viewport.screen_rows - 1
            for i in range(viewport.screen_rows):
                frame.append(self.row_text(i))
                frame.append(ansi.CLEAR_LINE_TO_END)
                # No newline after the final row, it would scroll the terminal.
                if i < last_row:
                    frame.append(ansi.NEWLINE)
            frame.append(ansi.move_to(*viewport.screen_cursor()))
            frame.append(ansi.SHOW_CURSOR)
        return frame


__all__ = [
    "FrameRenderer",
    "PLACEHOLDER",
    "WELCOME_TITLE",
    "visible_slice",
    "welcome_banner",
]
