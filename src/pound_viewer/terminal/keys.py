"""Decode raw terminal input into ``KeyStroke`` values.

Only legacy VT/xterm sequences are understood: arrows, Home/End (plus the
other editing keys so they are recognised and ignored), modifier-encoded
``CSI 1;<mod>X`` variants, control characters, and Alt/ESC prefixes.
Anything else decodes to the ``unknown`` key, which no binding uses.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from pound_viewer.keymaps import KeyStroke

ESC = "\x1b"
UNKNOWN_KEY = "unknown"

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1bOH": "home",
    "\x1b[1~": "home",
    "\x1b[7~": "home",
    "\x1b[F": "end",
    "\x1bOF": "end",
    "\x1b[4~": "end",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageup",
    "\x1b[6~": "pagedown",
}

# Final byte of a modified CSI 1;<mod>X sequence
_MODIFIED_FINALS = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}
_MODIFIED_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHF])$")

_MODIFIER_BITS = (("shift", 1), ("alt", 2), ("ctrl", 4))

# CSI (parameters, intermediates, final), SS3 + one byte, or ESC + one char.
_SEQUENCE_RE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|O.|.)?", re.DOTALL)
# An escape sequence cut off at the end of a read: lone ESC, CSI without its
# final byte, or SS3 without its key.
_INCOMPLETE_RE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*|O)?\Z")


def split_sequences(data: str) -> List[str]:
    """Break a chunk read from stdin into one string per key press."""

    chunks: List[str] = []
    index = 0
    while index < len(data):
        if data[index] == ESC:
            match = _SEQUENCE_RE.match(data, index)
            end = match.end() if match else index + 1
        else:
            end = index + 1
        chunks.append(data[index:end])
        index = end
    return chunks


def split_pending(data: str) -> Tuple[List[str], str]:
    """Like ``split_sequences`` but hold back an unfinished trailing sequence.

    Returns the complete key sequences and the leftover prefix, which the
    caller should prepend to the next read.
    """

    start = data.rfind(ESC)
    if start != -1 and _INCOMPLETE_RE.match(data, start):
        return split_sequences(data[:start]), data[start:]
    return split_sequences(data), ""


def _modifiers_from_param(param: int) -> tuple[str, ...]:
    bits = max(param - 1, 0)
    return tuple(name for name, bit in _MODIFIER_BITS if bits & bit)


def decode_key(data: str) -> KeyStroke:
    """Return the key stroke encoded by a single input sequence."""

    if not data:
        raise ValueError("cannot decode an empty key sequence")

    name = LEGACY_KEY_SEQUENCES.get(data)
    if name is not None:
        return KeyStroke(name)

    modified = _MODIFIED_RE.match(data)
    if modified:
        modifiers = _modifiers_from_param(int(modified.group(1)))
        return KeyStroke(_MODIFIED_FINALS[modified.group(2)], modifiers)

    if data == ESC:
        return KeyStroke("escape")
    if data in ("\r", "\n"):
        return KeyStroke("enter")
    if data == "\t":
        return KeyStroke("tab")
    if data in ("\x7f", "\x08"):
        return KeyStroke("backspace")
    if data == "\x00":
        return KeyStroke("space", ("ctrl",))
    if data == " ":
        return KeyStroke("space")

    if len(data) == 1 and 1 <= ord(data) <= 26:
        return KeyStroke(chr(ord(data) + ord("a") - 1), ("ctrl",))

    if len(data) == 2 and data[0] == ESC:
        inner = data[1]
        if 1 <= ord(inner) <= 26:
            return KeyStroke(chr(ord(inner) + ord("a") - 1), ("ctrl", "alt"))
        if inner.isprintable():
            return KeyStroke(inner, ("alt",))

    if len(data) == 1 and data.isprintable():
        return KeyStroke(data)

    return KeyStroke(UNKNOWN_KEY)


__all__ = [
    "LEGACY_KEY_SEQUENCES",
    "UNKNOWN_KEY",
    "decode_key",
    "split_pending",
    "split_sequences",
]
