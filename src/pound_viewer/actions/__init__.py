"""Action handlers invoked by resolved key bindings."""

from . import core, navigation
from .base import ActionContext, ActionResult

__all__ = [
    "ActionContext",
    "ActionResult",
    "core",
    "navigation",
]
