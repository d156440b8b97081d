"""Errors raised while loading documents."""

from __future__ import annotations

from typing import Optional


class DocumentLoadError(RuntimeError):
    """Raised when a document cannot be read from disk."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path
        self.reason = message

    def __str__(self) -> str:
        if self.path is None:
            return self.reason
        return f"cannot open {self.path}: {self.reason}"
