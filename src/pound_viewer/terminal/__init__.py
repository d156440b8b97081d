"""Terminal collaborators: escape primitives, key decoding, raw mode."""

from . import ansi
from .keys import UNKNOWN_KEY, decode_key, split_pending, split_sequences
from .raw import DEFAULT_POLL_MS, RawTerminal, Terminal, TerminalError

__all__ = [
    "DEFAULT_POLL_MS",
    "RawTerminal",
    "Terminal",
    "TerminalError",
    "UNKNOWN_KEY",
    "ansi",
    "decode_key",
    "split_pending",
    "split_sequences",
]
