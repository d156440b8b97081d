from __future__ import annotations

from pathlib import Path
from typing import Any, List

import pytest

from pound_viewer import cli
from pound_viewer.config import ViewerConfig
from pound_viewer.keymaps import KeyStroke
from pound_viewer.terminal import TerminalError


class FakeTerminal:
    """Context-managed terminal that quits on the first key."""

    instances: List["FakeTerminal"] = []

    def __init__(self, *, poll_ms: int = 500) -> None:
        self.poll_ms = poll_ms
        self.writes: List[str] = []
        self.entered = False
        self.exited = False
        FakeTerminal.instances.append(self)

    def __enter__(self) -> "FakeTerminal":
        self.entered = True
        return self

    def __exit__(self, *exc_info: Any) -> bool:
        self.exited = True
        return False

    def size(self) -> tuple[int, int]:
        return (40, 10)

    def write(self, data: str) -> None:
        self.writes.append(data)

    def read_key(self) -> KeyStroke:
        return KeyStroke("q", ("ctrl",))


class BrokenTerminal(FakeTerminal):
    def __enter__(self) -> "FakeTerminal":
        raise TerminalError("standard input is not a terminal")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "POUND_UI",
        "POUND_QUIT_KEY",
        "POUND_POLL_MS",
        "POUND_ENCODING",
        "POUND_LOG_FILE",
        "POUND_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    FakeTerminal.instances.clear()


def test_missing_file_exits_with_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing.txt"

    assert cli.main([str(missing)]) == 1

    err = capsys.readouterr().err
    assert err.startswith(f"pound: cannot open {missing}:")


def test_invalid_quit_key_is_usage_error() -> None:
    with pytest.raises(SystemExit) as info:
        cli.main(["--quit-key", "12"])

    assert info.value.code == 2


def test_runs_session_on_terminal(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("hello\nworld\n", encoding="utf-8")
    monkeypatch.setattr(cli, "RawTerminal", FakeTerminal)

    assert cli.main([str(target), "--poll-ms", "50"]) == 0

    terminal = FakeTerminal.instances[-1]
    assert terminal.poll_ms == 50
    assert terminal.entered and terminal.exited
    assert len(terminal.writes) == 1
    assert "hello" in terminal.writes[0]


def test_runs_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "RawTerminal", FakeTerminal)

    assert cli.main([]) == 0
    assert "Pound Viewer" in FakeTerminal.instances[-1].writes[0]


def test_terminal_errors_exit_with_status_one(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "RawTerminal", BrokenTerminal)

    assert cli.main([]) == 1
    assert "not a terminal" in capsys.readouterr().err


def test_config_from_env() -> None:
    config = ViewerConfig.from_env(
        {
            "POUND_UI": "textual",
            "POUND_QUIT_KEY": "x",
            "POUND_POLL_MS": "not-a-number",
            "POUND_LOG_LEVEL": "debug",
        }
    )

    assert config.ui == "textual"
    assert config.quit_key == "x"
    assert config.poll_ms == 500
    assert config.log_level == "debug"
    assert config.log_file is None


def test_config_merge_ignores_unset_overrides() -> None:
    config = ViewerConfig().merged(quit_key="w", poll_ms=None)

    assert config.quit_key == "w"
    assert config.poll_ms == 500


@pytest.mark.parametrize(
    "overrides",
    [
        {"ui": "web"},
        {"quit_key": "ab"},
        {"quit_key": "m"},
        {"poll_ms": 0},
        {"log_level": "bogus"},
    ],
)
def test_config_rejects_invalid_values(overrides: dict) -> None:
    with pytest.raises(ValueError):
        ViewerConfig(**overrides)


@pytest.mark.parametrize(
    "argv",
    [["--quit-key", "j"], ["--log-level", "bogus"]],
)
def test_unusable_options_are_usage_errors(
    argv: List[str], capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as info:
        cli.main(argv)

    assert info.value.code == 2
    assert "pound: error:" in capsys.readouterr().err


def test_bad_log_level_in_env_is_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POUND_LOG_LEVEL", "verbose")

    with pytest.raises(SystemExit) as info:
        cli.main([])

    assert info.value.code == 2
