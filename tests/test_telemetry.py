from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from pound_viewer.runtime import telemetry


class FakeLogger:
    """Records the calls ``telemetry`` makes on a telelog logger."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Any]] = []
        self.context: dict[str, str] = {}
        self.profiled: List[str] = []
        self.components: List[str] = []

    def info_with(self, message: str, pairs: Any) -> None:
        self.records.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.records.append(("error", message, dict(pairs)))

    def warning(self, message: str) -> None:
        self.records.append(("warning", message, None))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    logger = FakeLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_record_event_uses_structured_method(fake_logger: FakeLogger) -> None:
    telemetry.record_event("session.start", data={"lines": 3, "screen": (80, 24)})

    level, message, pairs = fake_logger.records[-1]
    assert (level, message) == ("info", "event::session.start")
    assert pairs == {"event": "session.start", "lines": "3", "screen": "(80, 24)"}


def test_record_event_falls_back_to_plain_method(fake_logger: FakeLogger) -> None:
    telemetry.record_event("viewport.scrolled", level="warning")

    assert fake_logger.records[-1][1].startswith("event::viewport.scrolled ")


def test_record_event_rejects_unknown_level(fake_logger: FakeLogger) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("x", level="loud")


def test_span_pushes_and_pops_context(fake_logger: FakeLogger) -> None:
    with telemetry.span("render::frame", component="render", metadata={"rows": 3}) as handle:
        assert fake_logger.context == {"rows": "3"}
        handle.add_metadata("status", "ok")

    assert fake_logger.context == {}
    assert fake_logger.profiled == ["render::frame"]
    assert fake_logger.components == ["render"]


def test_span_logs_failures_and_reraises(fake_logger: FakeLogger) -> None:
    with pytest.raises(KeyError):
        with telemetry.span("keymaps::resolve", component=True) as handle:
            handle.add_metadata("status", "miss")
            raise KeyError("boom")

    level, message, pairs = fake_logger.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert pairs["span"] == "keymaps::resolve"
    assert pairs["component"] == "keymaps::resolve"
    assert pairs["status"] == "miss"


def test_configure_rejects_mixed_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), level="debug")


def test_normalize_level_accepts_known_levels() -> None:
    assert telemetry.normalize_level("debug") == "DEBUG"
    assert telemetry.normalize_level(" Warning ") == "WARNING"
    with pytest.raises(ValueError):
        telemetry.normalize_level("verbose")
