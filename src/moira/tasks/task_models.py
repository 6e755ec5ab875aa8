# src/moira/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import ClassVar

DISPLAY_TS_FORMAT = "%b %d %Y %H:%M"


class TaskKind(StrEnum):
    """
    Closed set of task variants.

    The value doubles as the type tag written to the data file.
    """

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


@dataclass(slots=True)
class Task:
    description: str
    done: bool = field(default=False, kw_only=True)

    kind: ClassVar[TaskKind]

    def set_done(self, done: bool) -> None:
        self.done = bool(done)

    def render(self) -> str:
        checkbox = "[X]" if self.done else "[ ]"
        return f"{checkbox} {self.description}"

    def __str__(self) -> str:
        return self.render()


@dataclass(slots=True)
class TodoTask(Task):
    kind: ClassVar[TaskKind] = TaskKind.TODO


@dataclass(slots=True)
class DeadlineTask(Task):
    by: datetime

    kind: ClassVar[TaskKind] = TaskKind.DEADLINE

    def render(self) -> str:
        return f"{Task.render(self)} (by: {self.by.strftime(DISPLAY_TS_FORMAT)})"


@dataclass(slots=True)
class EventTask(Task):
    # "from" / "to" in the data file; start may be after end (not validated).
    start: datetime
    end: datetime

    kind: ClassVar[TaskKind] = TaskKind.EVENT

    def render(self) -> str:
        start = self.start.strftime(DISPLAY_TS_FORMAT)
        end = self.end.strftime(DISPLAY_TS_FORMAT)
        return f"{Task.render(self)} (from: {start} to: {end})"


AnyTask = TodoTask | DeadlineTask | EventTask
