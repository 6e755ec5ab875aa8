# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from moira.config import Settings

_VARS = (
    "MOIRA_APP_NAME",
    "MOIRA_LOG_LEVEL",
    "MOIRA_LOG_TO_FILE",
    "MOIRA_DATA_DIR",
    "MOIRA_TASKS_PATH",
    "MOIRA_LOG_DIR",
)


def _clear(monkeypatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    _clear(monkeypatch)
    s = Settings.from_env()
    assert s.app_name == "Moira"
    assert s.log_level == "INFO"
    assert s.log_to_file is True
    assert s.tasks_path == Path("data") / "tasks.txt"
    assert s.log_dir == Path("data")


def test_data_dir_moves_derived_paths(monkeypatch, tmp_path: Path) -> None:
    _clear(monkeypatch)
    monkeypatch.setenv("MOIRA_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("MOIRA_LOG_LEVEL", "debug")
    monkeypatch.setenv("MOIRA_LOG_TO_FILE", "off")

    s = Settings.from_env()
    assert s.tasks_path == tmp_path / "tasks.txt"
    assert s.log_dir == tmp_path
    assert s.log_level == "DEBUG"
    assert s.log_to_file is False


def test_explicit_tasks_path_wins(monkeypatch, tmp_path: Path) -> None:
    _clear(monkeypatch)
    monkeypatch.setenv("MOIRA_DATA_DIR", str(tmp_path / "a"))
    monkeypatch.setenv("MOIRA_TASKS_PATH", str(tmp_path / "b" / "mine.txt"))
    assert Settings.from_env().tasks_path == tmp_path / "b" / "mine.txt"
