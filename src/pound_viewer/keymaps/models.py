"""Key strokes, key sequences, and the bindings that connect them to actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

MODIFIER_ORDER = ("ctrl", "alt", "shift")

# Handlers receive (ActionContext, ResolutionMatch) and return an ActionResult.
ActionHandler = Callable[..., object]


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    unknown = values.difference(MODIFIER_ORDER)
    if unknown:
        raise ValueError(f"Unknown modifiers {sorted(unknown)}")
    return tuple(m for m in MODIFIER_ORDER if m in values)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``up`` or ``ctrl+q``.

    Named keys are lowercased; single characters keep their case so ``Q``
    and ``q`` stay distinct.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key = self.key if len(self.key) == 1 else self.key.lower()
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``ctrl+q`` style notation."""

        if not token:
            raise ValueError("token cannot be empty")
        head, _, key = token.rpartition("+")
        if not key:
            # The plus key itself: "+" or "ctrl++".
            head, key = head[:-1] if head.endswith("+") else head, "+"
        return cls(key, tuple(head.split("+")) if head else ())


@dataclass(frozen=True, slots=True)
class KeySequence:
    """One or more strokes that must arrive in order."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *tokens: str) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(token) for token in tokens if token))

    @classmethod
    def parse(cls, signature: str) -> "KeySequence":
        """Parse a space separated signature such as ``"g g"``."""

        return cls.from_strings(*signature.split())


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler a binding can point at."""

    id: str
    handler: ActionHandler
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence with an action id."""

    id: str
    sequence: KeySequence
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "ActionHandler",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "MODIFIER_ORDER",
]
