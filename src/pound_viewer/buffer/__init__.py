"""Document storage for the viewer."""

from .document import Document, split_lines
from .errors import DocumentLoadError

__all__ = [
    "Document",
    "DocumentLoadError",
    "split_lines",
]
