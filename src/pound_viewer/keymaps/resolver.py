"""Resolve key strokes against the registry through a token trie."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Optional, Sequence, Tuple

from pound_viewer.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)


class KeyTrie:
    """Prefix tree over the token sequences of a set of bindings."""

    def __init__(self, bindings: Iterable[Binding] = ()) -> None:
        self.root = TrieNode()
        for binding in bindings:
            self.insert(binding)

    def insert(self, binding: Binding) -> None:
        node = self.root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, TrieNode())
        node.binding = binding

    def walk(self, tokens: Sequence[str]) -> Tuple[Optional[TrieNode], int]:
        """Follow ``tokens`` from the root.

        Returns the node reached (``None`` on a dead end) and how many tokens
        were consumed before stopping.
        """

        node = self.root
        for consumed, token in enumerate(tokens):
            child = node.children.get(token)
            if child is None:
                return None, consumed
            node = child
        return node, len(tokens)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Classifies accumulated key tokens as a match, a pending prefix or a miss.

    The trie is rebuilt lazily whenever the registry revision changes.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._trie: Optional[KeyTrie] = None
        self._trie_revision = -1

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(self, tokens: Sequence[str]) -> ResolutionResult:
        tokens = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"tokens": " ".join(tokens)},
        ) as handle:
            node, consumed = self._current_trie().walk(tokens)
            result = self._classify(node, consumed)
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def _classify(self, node: Optional[TrieNode], consumed: int) -> ResolutionResult:
        if node is None or consumed == 0:
            return ResolutionResult(status="miss", consumed=consumed)
        if node.binding is not None:
            action = self._registry.get_action(node.binding.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding=node.binding, action=action),
                consumed=consumed,
            )
        return ResolutionResult(
            status="pending",
            consumed=consumed,
            next_expected=tuple(sorted(node.children)),
        )

    def _current_trie(self) -> KeyTrie:
        revision = self._registry.revision()
        if self._trie is None or self._trie_revision != revision:
            self._trie = KeyTrie(self._registry.iter_bindings())
            self._trie_revision = revision
        return self._trie


__all__ = [
    "KeyTrie",
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
