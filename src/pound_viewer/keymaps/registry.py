"""Keymap registry: the actions the viewer can run and the keys bound to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from pound_viewer.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int


class KeymapConflictError(RuntimeError):
    """Raised when a binding would hide, or be hidden by, an existing one.

    Two bindings collide when their key sequences are equal or one is a
    prefix of the other, since the shorter would always match first.
    """

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        names = ", ".join(f"'{c.id}' ({c.key_signature})" for c in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.key_signature}) collides with {names}"
        )


def _overlaps(left: Binding, right: Binding) -> bool:
    a, b = left.sequence.tokens, right.sequence.tokens
    shorter = min(len(a), len(b))
    return a[:shorter] == b[:shorter]


class KeymapRegistry:
    """Single source of truth for actions and bindings.

    Every key signature maps to at most one binding. ``revision`` increases on
    each binding change so resolvers know when to rebuild.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_signature: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def binding_for(self, key_signature: str) -> Optional[Binding]:
        """Binding registered for ``key_signature`` (``"ctrl+q"``, ``"g g"``)."""

        binding_id = self._by_signature.get(key_signature)
        return None if binding_id is None else self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` colliding bindings are dropped first."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.key_signature},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            collisions = [
                existing
                for existing in self._bindings.values()
                if existing.id != binding.id and _overlaps(existing, binding)
            ]
            if collisions and not replace:
                handle.add_metadata("conflicts", [c.id for c in collisions])
                raise KeymapConflictError(binding, collisions)

            for stale in collisions:
                self._forget(stale)
            if binding.id in self._bindings:
                self._forget(self._bindings[binding.id])

            self._bindings[binding.id] = binding
            self._by_signature[binding.key_signature] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is not None:
            self._forget(binding)
            self._revision += 1
        return binding

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
        )

    def _forget(self, binding: Binding) -> None:
        del self._bindings[binding.id]
        if self._by_signature.get(binding.key_signature) == binding.id:
            del self._by_signature[binding.key_signature]


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
