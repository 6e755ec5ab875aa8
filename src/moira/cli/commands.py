# src/moira/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from ..tasks.task_codec import DELIMITER, TaskFormatError, parse_timestamp
from ..tasks.task_models import AnyTask, DeadlineTask, EventTask, TodoTask

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)


class CommandError(ValueError):
    """Bad user input; the message is shown to the user as-is."""


class CommandRegistry:
    """Bare-word command registry used by the console connector (todo, list, mark, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a line like "deadline report /by 2024-03-01T17:00".
        Returns a reply string, or None for a blank line.
        """
        line = line.strip()
        if not line:
            return None

        name, _, args = line.partition(" ")
        name = name.lower()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: {name}. Use help to list available commands."

        try:
            return handler(state, args.strip())
        except CommandError as e:
            logger.debug("Command %s rejected: %s", name, e)
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _description(raw: str, usage: str) -> str:
    text = raw.strip()
    if not text:
        raise CommandError(f"The description cannot be empty. Usage: {usage}")
    if DELIMITER in text:
        raise CommandError(f"The description cannot contain '{DELIMITER}'.")
    return text


def _timestamp(raw: str, label: str) -> datetime:
    try:
        return parse_timestamp(raw.strip())
    except TaskFormatError:
        raise CommandError(
            f"Could not read the {label} time {raw.strip()!r}. Use YYYY-MM-DDTHH:MM, e.g. 2024-03-01T17:00."
        ) from None


def _split_option(args: str, option: str, usage: str) -> tuple[str, str]:
    parts = re.split(rf"\s*{re.escape(option)}(?:\s+|$)", args, maxsplit=1)
    if len(parts) != 2 or not parts[1].strip():
        raise CommandError(f"Missing {option}. Usage: {usage}")
    return parts[0], parts[1]


def _task_number(state: AppState, args: str, usage: str) -> int:
    """Parse a 1-based task number and return the 0-based index."""
    raw = args.strip()
    if not raw.isdecimal() or not raw.isascii():
        raise CommandError(f"Please give a task number. Usage: {usage}")
    index = int(raw) - 1
    if not 0 <= index < len(state.tasks):
        raise CommandError(f"There is no task {raw}; the list has {len(state.tasks)} task(s).")
    return index


def _added(state: AppState, task: AnyTask) -> str:
    state.tasks.add_task(task)
    logger.debug("Task added kind=%s total=%d", task.kind, len(state.tasks))
    return f"Got it. I've added this task:\n  {task}\nNow you have {len(state.tasks)} task(s) in the list."


# ---- handlers ----


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: str) -> str:
    if state.tasks.is_empty():
        return "Your task list is empty."
    lines = ["Here are the tasks in your list:"]
    for i, task in enumerate(state.tasks, start=1):
        lines.append(f"{i}. {task}")
    return "\n".join(lines)


def cmd_todo(state: AppState, args: str) -> str:
    return _added(state, TodoTask(_description(args, "todo <description>")))


def cmd_deadline(state: AppState, args: str) -> str:
    usage = "deadline <description> /by <time>"
    desc, by = _split_option(args, "/by", usage)
    return _added(state, DeadlineTask(_description(desc, usage), _timestamp(by, "/by")))


def cmd_event(state: AppState, args: str) -> str:
    """
    event <description> /from <time> /to <time>

    The start may be after the end; that is not checked.
    """
    usage = "event <description> /from <time> /to <time>"
    desc, rest = _split_option(args, "/from", usage)
    start, end = _split_option(rest, "/to", usage)
    return _added(
        state,
        EventTask(_description(desc, usage), _timestamp(start, "/from"), _timestamp(end, "/to")),
    )


def cmd_mark(state: AppState, args: str) -> str:
    task = state.tasks.get_task(_task_number(state, args, "mark <number>"))
    task.set_done(True)
    return f"Nice! I've marked this task as done:\n  {task}"


def cmd_unmark(state: AppState, args: str) -> str:
    task = state.tasks.get_task(_task_number(state, args, "unmark <number>"))
    task.set_done(False)
    return f"OK, I've marked this task as not done yet:\n  {task}"


def cmd_delete(state: AppState, args: str) -> str:
    task = state.tasks.remove_task(_task_number(state, args, "delete <number>"))
    return f"Noted. I've removed this task:\n  {task}\nNow you have {len(state.tasks)} task(s) in the list."


def cmd_find(state: AppState, args: str) -> str:
    keyword = args.strip()
    if not keyword:
        raise CommandError("Usage: find <keyword>")
    matches = state.tasks.find_tasks(keyword)
    if not matches:
        return f"No tasks match {keyword!r}."
    lines = ["Here are the matching tasks in your list:"]
    for index, task in matches:
        lines.append(f"{index + 1}. {task}")
    return "\n".join(lines)


def cmd_bye(state: AppState, args: str) -> str:
    state.stop()
    return "Bye. Hope to see you again soon!"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show all tasks.", aliases=["ls"])
registry.register("todo", cmd_todo, help_text="Add a task: todo <description>.")
registry.register(
    "deadline", cmd_deadline, help_text="Add a task with a due time: deadline <description> /by <time>."
)
registry.register(
    "event", cmd_event, help_text="Add a timed task: event <description> /from <time> /to <time>."
)
registry.register("mark", cmd_mark, help_text="Mark a task as done: mark <number>.")
registry.register("unmark", cmd_unmark, help_text="Mark a task as not done: unmark <number>.")
registry.register("delete", cmd_delete, help_text="Remove a task: delete <number>.", aliases=["rm"])
registry.register("find", cmd_find, help_text="Search task descriptions: find <keyword>.")
registry.register("bye", cmd_bye, help_text="Save and quit.", aliases=["exit", "quit"])
