# src/moira/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Everything a running session owns.

    Built once by the bootstrap and passed to the console loop and command
    handlers. The loop runs while `running` is True; `bye` clears it.
    """

    settings: Any
    tasks: TaskList
    store: TaskStore

    running: bool = True

    def stop(self) -> None:
        self.running = False
