# tests/test_commands.py

from __future__ import annotations

from datetime import datetime

from moira.cli.commands import CommandError, CommandRegistry, registry
from moira.tasks.task_models import DeadlineTask, EventTask, TodoTask


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    seen: list[str] = []

    def h(state, args):
        seen.append(args)
        return "ok"

    def bad(state, args):
        raise CommandError("nope")

    reg.register("a", h, "a", aliases=["A1"])
    reg.register("b", bad, "b")

    assert reg.handle(state, "a  x y ") == "ok"
    assert reg.handle(state, "a1") == "ok"
    assert seen == ["x y", ""]
    assert reg.handle(state, "b") == "nope"
    assert "  a - a" in reg.build_help()


def test_command_registry_unknown_and_blank(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "   ") is None
    assert "Unknown command" in (reg.handle(state, "nope") or "")


def test_add_each_kind(state) -> None:
    registry.handle(state, "todo Buy milk")
    registry.handle(state, "deadline Submit report /by 2024-03-01T17:00")
    reply = registry.handle(state, "event Team sync /from 2024-03-02T09:00 /to 2024-03-02T10:00")

    assert "3 task(s)" in (reply or "")
    assert list(state.tasks) == [
        TodoTask("Buy milk"),
        DeadlineTask("Submit report", datetime(2024, 3, 1, 17, 0)),
        EventTask("Team sync", datetime(2024, 3, 2, 9, 0), datetime(2024, 3, 2, 10, 0)),
    ]


def test_add_rejects_bad_input(state) -> None:
    assert "cannot be empty" in (registry.handle(state, "todo") or "")
    assert "cannot contain" in (registry.handle(state, "todo a|b") or "")
    assert "Missing /by" in (registry.handle(state, "deadline pay") or "")
    assert "Could not read" in (registry.handle(state, "deadline pay /by friday") or "")
    assert "Missing /to" in (registry.handle(state, "event x /from 2024-01-01T10:00") or "")
    registry.handle(state, "todo only")
    assert "task number" in (registry.handle(state, "mark ²") or "")
    assert "task number" in (registry.handle(state, "delete ٣") or "")
    registry.handle(state, "delete 1")
    assert state.tasks.is_empty()


def test_mark_unmark_delete_use_one_based_numbers(state) -> None:
    registry.handle(state, "todo first")
    registry.handle(state, "todo second")

    assert "[X] second" in (registry.handle(state, "mark 2") or "")
    assert state.tasks.get_task(1).done is True
    registry.handle(state, "unmark 2")
    assert state.tasks.get_task(1).done is False

    assert "There is no task 3" in (registry.handle(state, "mark 3") or "")
    assert "There is no task 0" in (registry.handle(state, "delete 0") or "")
    assert "task number" in (registry.handle(state, "delete two") or "")

    assert "first" in (registry.handle(state, "delete 1") or "")
    assert [t.description for t in state.tasks] == ["second"]


def test_list_and_find(state) -> None:
    assert registry.handle(state, "list") == "Your task list is empty."

    registry.handle(state, "todo Read book")
    registry.handle(state, "todo Buy milk")
    registry.handle(state, "mark 1")

    assert registry.handle(state, "list") == (
        "Here are the tasks in your list:\n1. [X] Read book\n2. [ ] Buy milk"
    )
    assert "2. [ ] Buy milk" in (registry.handle(state, "find MILK") or "")
    assert "No tasks match" in (registry.handle(state, "find tea") or "")


def test_bye_stops_the_session(state) -> None:
    assert state.running is True
    assert "Bye" in (registry.handle(state, "bye") or "")
    assert state.running is False
