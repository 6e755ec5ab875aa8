# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from moira.core.state import AppState
from moira.tasks.task_list import TaskList
from moira.tasks.task_models import DeadlineTask, EventTask, TodoTask
from moira.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="Moira",
        log_level="INFO",
        log_to_file=False,
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.txt",
        log_dir=tmp_path / "data",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired with a real TaskStore on a temporary path (empty list)."""
    tasks = TaskList()
    return AppState(settings=settings, tasks=tasks, store=TaskStore(tasks, settings.tasks_path))


@pytest.fixture()
def sample_tasks() -> list:
    return [
        TodoTask("Buy milk"),
        DeadlineTask("Submit report", datetime(2024, 3, 1, 17, 0), done=True),
        EventTask("Team sync", datetime(2024, 3, 2, 9, 0), datetime(2024, 3, 2, 10, 0)),
    ]
