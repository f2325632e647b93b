# src/todo_tracker/cli/console.py

from __future__ import annotations

import logging

from ..core.state import AppState
from ..tasks.errors import WriteFailedError
from .commands import QUIT_COMMANDS, format_stats_line
from .commands import registry as command_registry

logger = logging.getLogger(__name__)

PROMPT = "todo> "


def _autosave(state: AppState) -> None:
    """Save after a mutating command; failures are reported, the loop goes on."""
    try:
        state.task_store.save()
    except WriteFailedError as e:
        print(f"Warning: Could not save tasks: {e}")


def save_on_exit(state: AppState) -> bool:
    """Final save. Reported to the user as text only; never changes the exit status."""
    print("Saving tasks...")
    try:
        state.task_store.save()
    except WriteFailedError as e:
        print(f"Error saving tasks: {e}")
        return False
    print("Tasks saved successfully!")
    return True


def run_console_loop(state: AppState) -> None:
    logger.info("Console started (file=%s).", state.task_store.path)
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todo"))

    print(f"=== {app_name.upper()} ===")
    print(format_stats_line(state.task_store.stats()))
    print()
    print(command_registry.build_help())

    while True:
        try:
            user_input = input(f"\n{PROMPT}").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.split(maxsplit=1)[0].lower() in QUIT_COMMANDS:
            logger.info("Console quit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt during a command, exiting.")
            print()
            break
        except Exception:
            logger.exception("Command handler crashed.")
            print("Internal error while handling a command.")
            continue

        if reply is None:
            continue

        print(reply.text)
        if reply.changed:
            _autosave(state)

    save_on_exit(state)
    print("Goodbye!")
    logger.info("Console finished.")
