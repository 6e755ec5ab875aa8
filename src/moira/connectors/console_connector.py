# src/moira/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = ">>> You: "


def _stdin_lines() -> Iterator[str]:
    while True:
        try:
            yield input(PROMPT)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            return


def run_console_loop(
    state: AppState,
    lines: Iterable[str] | None = None,
    emit: Callable[[str], None] = print,
) -> None:
    """
    Read commands until `state.running` is cleared or the input runs out.

    `lines` defaults to interactive stdin; tests pass a list instead.
    """
    logger.info("Console connector started (tasks=%d).", len(state.tasks))
    source = iter(lines) if lines is not None else _stdin_lines()

    while state.running:
        try:
            user_input = next(source)
        except StopIteration:
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            emit("")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            emit(reply)

    logger.info("Console connector finished.")
