# src/moira/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the task list and loads it from the data file,
- wires both into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    tasks = TaskList()
    store = TaskStore(tasks, settings.tasks_path)
    if store.diagnostics:
        logger.warning(
            "Skipped %d malformed record(s) in %s.", len(store.diagnostics), store.path
        )

    return AppState(settings=settings, tasks=tasks, store=store)
