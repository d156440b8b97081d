"""Viewer settings layered from ``POUND_*`` environment variables and CLI flags."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Literal, Mapping, Optional

from pound_viewer.keymaps import DEFAULT_QUIT_KEY, validate_quit_key
from pound_viewer.runtime.telemetry import normalize_level
from pound_viewer.terminal import DEFAULT_POLL_MS

ENV_PREFIX = "POUND_"

UiKind = Literal["terminal", "textual"]
UI_CHOICES: tuple[str, ...] = ("terminal", "textual")


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    ui: UiKind = "terminal"
    quit_key: str = DEFAULT_QUIT_KEY
    poll_ms: int = DEFAULT_POLL_MS
    encoding: str = "utf-8"
    log_file: Optional[str] = None
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        if self.ui not in UI_CHOICES:
            raise ValueError(f"ui must be one of {UI_CHOICES}, got {self.ui!r}")
        validate_quit_key(self.quit_key)
        if self.poll_ms <= 0:
            raise ValueError("poll_ms must be positive")
        if self.log_level is not None:
            normalize_level(self.log_level)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ViewerConfig":
        source = os.environ if env is None else env
        ui = source.get(f"{ENV_PREFIX}UI", "terminal")
        return cls(
            ui=ui,  # type: ignore[arg-type]
            quit_key=source.get(f"{ENV_PREFIX}QUIT_KEY", DEFAULT_QUIT_KEY),
            poll_ms=_env_int(source, f"{ENV_PREFIX}POLL_MS", DEFAULT_POLL_MS),
            encoding=source.get(f"{ENV_PREFIX}ENCODING", "utf-8"),
            log_file=source.get(f"{ENV_PREFIX}LOG_FILE") or None,
            log_level=source.get(f"{ENV_PREFIX}LOG_LEVEL") or None,
        )

    def merged(self, **overrides: object) -> "ViewerConfig":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


__all__ = ["UI_CHOICES", "ViewerConfig"]
