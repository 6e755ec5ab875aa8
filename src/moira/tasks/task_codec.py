# src/moira/tasks/task_codec.py

"""
Line format of the task data file.

One task per line, fields joined by "|" (no escaping):

    T|<done>|<description>
    D|<done>|<description>|<by>
    E|<done>|<description>|<from>|<to>

<done> is "0" or "1". Timestamps are naive ISO date-times
(YYYY-MM-DDTHH:MM[:SS[.ffffff]]). Seconds are only written when non-zero,
so a value read as "2024-03-01T17:00" is written back the same way.

Adding a variant means touching encode_task and decode_line together.
"""

from __future__ import annotations

import re
from datetime import datetime

from .task_models import AnyTask, DeadlineTask, EventTask, TaskKind, TodoTask

DELIMITER = "|"

# field count -> expected type tag
FIELD_COUNTS: dict[int, TaskKind] = {
    3: TaskKind.TODO,
    4: TaskKind.DEADLINE,
    5: TaskKind.EVENT,
}

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?$")


class TaskFormatError(ValueError):
    """A persisted record that cannot be turned into a task."""

    def __init__(self, reason: str, line: str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line


def format_timestamp(value: datetime) -> str:
    """Naive datetimes only; the file format has no room for an offset."""
    if value.tzinfo is not None:
        raise ValueError(f"timezone-aware timestamp {value.isoformat()!r} cannot be stored")
    if value.second == 0 and value.microsecond == 0:
        return value.isoformat(sep="T", timespec="minutes")
    return value.isoformat(sep="T")


def parse_timestamp(raw: str) -> datetime:
    if not _TIMESTAMP_RE.match(raw):
        raise TaskFormatError(f"malformed timestamp {raw!r}")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        # e.g. month 13 passes the regex but not the calendar
        raise TaskFormatError(f"invalid timestamp {raw!r}: {e}") from e


def _encode_done(done: bool) -> str:
    return "1" if done else "0"


def _decode_done(raw: str) -> bool:
    if raw == "1":
        return True
    if raw == "0":
        return False
    raise TaskFormatError(f"done flag must be 0 or 1, got {raw!r}")


def encode_task(task: AnyTask) -> str:
    """Return the record for one task (without line terminator)."""
    head = [task.kind.value, _encode_done(task.done), task.description]

    if isinstance(task, TodoTask):
        fields = head
    elif isinstance(task, DeadlineTask):
        fields = [*head, format_timestamp(task.by)]
    elif isinstance(task, EventTask):
        fields = [*head, format_timestamp(task.start), format_timestamp(task.end)]
    else:
        raise TypeError(f"Unsupported task type: {type(task).__name__}")

    return DELIMITER.join(fields)


def split_fields(line: str) -> list[str]:
    # Trailing empty fields are dropped: "T|0|" has two fields, not three.
    fields = line.split(DELIMITER)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def decode_line(line: str) -> AnyTask:
    """
    Parse one record into a task.

    The field count selects the variant, the leading tag must agree with it.
    Raises TaskFormatError on any structural or content problem.
    """
    fields = split_fields(line)

    expected = FIELD_COUNTS.get(len(fields))
    if expected is None:
        raise TaskFormatError(f"unexpected field count {len(fields)}", line)

    if fields[0] != expected.value:
        raise TaskFormatError(
            f"type tag {fields[0]!r} does not match {len(fields)} fields (expected {expected.value!r})",
            line,
        )

    try:
        done = _decode_done(fields[1])
        description = fields[2]

        if expected is TaskKind.TODO:
            return TodoTask(description, done=done)
        if expected is TaskKind.DEADLINE:
            return DeadlineTask(description, parse_timestamp(fields[3]), done=done)
        return EventTask(
            description,
            parse_timestamp(fields[3]),
            parse_timestamp(fields[4]),
            done=done,
        )
    except TaskFormatError as e:
        raise TaskFormatError(e.reason, line) from None
