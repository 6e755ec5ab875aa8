# src/moira/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .task_codec import TaskFormatError, decode_line
from .task_list import TaskList

logger = logging.getLogger(__name__)

DEFAULT_TASKS_PATH = Path("data") / "tasks.txt"


@dataclass(frozen=True, slots=True)
class LoadDiagnostic:
    """One record that was skipped while loading (line_number 0 = whole file)."""

    line_number: int
    line: str
    reason: str

    def __str__(self) -> str:
        if self.line_number == 0:
            return f"Task file not loaded: {self.reason}"
        return f"Task formatting error (line {self.line_number}): {self.line!r} not loaded ({self.reason})"


class TaskStore:
    """
    Flat-file task storage.

    - loads the file into the given TaskList on construction (unless load=False)
    - save_data() rewrites the whole file from the TaskList

    Load is forgiving: a bad record (including one that is not valid UTF-8) is
    skipped and recorded in `diagnostics`, the rest of the file still loads.
    A missing file simply means "no tasks yet". If the file exists but cannot
    be read at all, save_data() refuses to overwrite it for this session.

    Save goes through a temporary file and os.replace, so a failed write
    leaves the previous file in place.
    """

    def __init__(
        self,
        task_list: TaskList,
        path: str | Path = DEFAULT_TASKS_PATH,
        *,
        load: bool = True,
    ) -> None:
        self._task_list = task_list
        self._path = Path(path)
        self.diagnostics: list[LoadDiagnostic] = []
        self._read_failed = False
        if load:
            total = self.load()
            logger.info("TaskStore ready path=%s loaded=%s", self._path, total)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def task_list(self) -> TaskList:
        return self._task_list

    def _report(self, diagnostic: LoadDiagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic)

    # ---- load ----

    def load(self) -> int:
        """
        Append every valid record of the data file to the task list.

        Returns the number of tasks appended.
        """
        if not self._path.exists():
            logger.debug("No task file at %s; starting empty.", self._path)
            return 0

        loaded = 0
        try:
            # Bytes, decoded per line: one bad byte only costs its own record.
            with self._path.open("rb") as f:
                for line_number, raw in enumerate(f, start=1):
                    raw = raw.removesuffix(b"\n").removesuffix(b"\r")
                    try:
                        line = raw.decode("utf-8")
                    except UnicodeDecodeError as e:
                        line = raw.decode("utf-8", errors="replace")
                        self._report(LoadDiagnostic(line_number, line, f"not valid UTF-8: {e.reason}"))
                        continue
                    try:
                        task = decode_line(line)
                    except TaskFormatError as e:
                        self._report(LoadDiagnostic(line_number, line, e.reason))
                        continue
                    self._task_list.add_task(task)
                    loaded += 1
        except OSError as e:
            self._read_failed = True
            self.diagnostics.append(LoadDiagnostic(0, "", str(e)))
            logger.error("Error reading task file %s: %s; it will not be overwritten.", self._path, e)

        return loaded

    # ---- save ----

    def save_data(self) -> bool:
        """
        Overwrite the data file with the current task list.

        Returns False (after logging) when the file could not be read at load
        time, when the directory cannot be created or when the write fails;
        never raises OSError.
        """
        if self._read_failed:
            logger.error("Task file %s was not read; refusing to overwrite it.", self._path)
            return False

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.exception("Error creating data folder %s; tasks not saved.", self._path.parent)
            return False

        data = self._task_list.get_task_list_data()
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except OSError:
            logger.exception("Error saving tasks to %s; tasks not saved.", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            return False

        logger.info("Saved %d tasks to %s", len(self._task_list), self._path)
        return True
