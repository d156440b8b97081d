"""Declarative keymap: bindings from key sequences to viewer actions."""

from .models import ActionHandler, ActionRef, Binding, KeySequence, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, KeyTrie, ResolutionMatch, ResolutionResult
from .defaults import (
    DEFAULT_QUIT_KEY,
    RESERVED_QUIT_KEYS,
    load_default_keymaps,
    quit_binding,
    validate_quit_key,
)

__all__ = [
    "ActionHandler",
    "ActionRef",
    "Binding",
    "DEFAULT_QUIT_KEY",
    "KeySequence",
    "KeyStroke",
    "KeyTrie",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "RESERVED_QUIT_KEYS",
    "RegistryStats",
    "ResolutionMatch",
    "ResolutionResult",
    "load_default_keymaps",
    "quit_binding",
    "validate_quit_key",
]
