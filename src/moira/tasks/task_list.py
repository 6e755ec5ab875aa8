# src/moira/tasks/task_list.py

from __future__ import annotations

from collections.abc import Iterator

from .task_codec import encode_task
from .task_models import AnyTask


class TaskList:
    """
    Ordered, index-addressable task container.

    Insertion order is display order. Indexes are 0-based; negative indexes
    are rejected rather than counted from the end.
    """

    def __init__(self, tasks: list[AnyTask] | None = None) -> None:
        self._tasks: list[AnyTask] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[AnyTask]:
        return iter(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def add_task(self, task: AnyTask) -> None:
        self._tasks.append(task)

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"task index {index} out of range (size {len(self._tasks)})")
        return index

    def get_task(self, index: int) -> AnyTask:
        return self._tasks[self._check_index(index)]

    def remove_task(self, index: int) -> AnyTask:
        return self._tasks.pop(self._check_index(index))

    def find_tasks(self, keyword: str) -> list[tuple[int, AnyTask]]:
        """Return (index, task) pairs whose description contains keyword (case-insensitive)."""
        needle = keyword.casefold()
        return [(i, t) for i, t in enumerate(self._tasks) if needle in t.description.casefold()]

    def get_task_list_data(self) -> str:
        """Full data-file text: one record per task, each newline-terminated."""
        return "".join(f"{encode_task(t)}\n" for t in self._tasks)
