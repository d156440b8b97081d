"""Textual host for the viewer.

Only the controller is imported eagerly; ``app`` needs the ``textual``
package and is loaded on demand.
"""

from .controller import (
    HostSurface,
    TextualUIHooks,
    TextualViewerAdapter,
    normalize_textual_key,
)

__all__ = [
    "HostSurface",
    "TextualUIHooks",
    "TextualViewerAdapter",
    "normalize_textual_key",
]
