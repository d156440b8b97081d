"""Telemetry services built directly on telelog.

The viewer owns the terminal while it runs, so console output is opt-in
(``POUND_LOG_CONSOLE=1``). The public surface mirrors what the rest of the
package needs:

``configure(...)`` -- rebuild the telelog configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager marrying profiling + component tracking
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, Union, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "POUND_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "pound_viewer")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_level(level: str) -> str:
    """Uppercase ``level`` and check it is one telelog understands."""

    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"log level must be one of {LOG_LEVELS}, got {level!r}")
    return name


def build_config(
    *,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    console: Optional[bool] = None,
    json_format: Optional[bool] = None,
) -> Any:
    """Return a ``tl.Config`` from explicit values, falling back to ``POUND_*``."""

    config = tl.Config()
    config.with_min_level(normalize_level(level or _env("LOG_LEVEL") or "INFO"))

    if console is None:
        console = _env_flag("LOG_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if json_format is None:
        json_format = _env_flag("LOG_JSON", False)
    if json_format:
        config.with_json_format(True)

    target = log_file or _env("LOG_FILE") or ""
    if target:
        config.with_file_output(target)
        config.with_buffering(_env_flag("LOG_BUFFERED", False))

    config.with_profiling(True)
    return config


def configure(
    *,
    config: Optional[Any] = None,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    ``config`` adopts a prepared ``tl.Config`` as-is; otherwise one is built
    from ``level``/``log_file`` layered over the environment.
    """

    global _ACTIVE_CONFIG
    if config is not None and (level or log_file):
        raise ValueError("Provide either `config` or level/log_file, not both.")

    _ACTIVE_CONFIG = config or build_config(level=level, log_file=log_file)
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` configured for the viewer."""

    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ensure_config())
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _emit(log: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    # telelog exposes ``<level>_with`` for key/value records; fall back to text.
    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, _format_pairs(payload))
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit an ``event::<name>`` record carrying ``data`` as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Lets the body of a ``span`` attach results to its failure record."""

    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def failure_payload(self, reason: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        return payload


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Union[str, bool, None] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name`` and optionally track it as a component.

    ``component=True`` reuses ``name`` as the component identifier. The
    initial ``metadata`` is pushed as logger context while the block runs.
    An exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    handle = SpanHandle(name=name, component=component_name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in list(handle.metadata.items()):
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            _emit(log, "error", "span::fail", handle.failure_payload(str(exc)))
            raise


__all__ = [
    "LOG_LEVELS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "normalize_level",
    "record_event",
    "span",
]
