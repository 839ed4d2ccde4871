# src/daybook/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tasks
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one input line to the store.

    Slash commands go through the registry; any other non-empty text is the
    "new task" input and is added for today.
    """
    cmd_response = command_registry.handle(state, line)
    if cmd_response is not None:
        return cmd_response

    store = state.task_store
    store.new_task = line
    task = store.add_task()
    if task is None:
        return None
    return f'Added "{task.text}" for {task.date}.'


def run_console_loop(state: AppState) -> None:
    store = state.task_store
    logger.info("Console connector started (tasks=%d).", len(store))
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    # Re-render after every store change (state update -> rerender).
    changed = {"flag": False}

    def _on_change(_store) -> None:
        changed["flag"] = True

    unsubscribe = store.subscribe(_on_change)
    print(render_tasks(store))

    try:
        while True:
            try:
                user_input = input("\n> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            changed["flag"] = False
            try:
                reply = handle_line(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is not None:
                _print_ts(reply)
            if changed["flag"]:
                print(render_tasks(store))
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
