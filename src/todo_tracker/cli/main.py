# src/todo_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task file, then runs the
console loop in the main thread.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from .. import __version__
from ..cli.bootstrap import create_initial_state, load_tasks
from ..cli.console import run_console_loop
from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.errors import CorruptStateError

# Named explicitly: under `python -m` this module is __main__.
logger = logging.getLogger("todo_tracker.cli.main")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo-tracker",
        description="Interactive personal task tracker",
    )
    parser.add_argument(
        "--file",
        help="Path to the task list JSON file (default: TODO_FILE or ./todos.json)",
    )
    parser.add_argument(
        "--log-level",
        help="Console log level (default: TODO_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _apply_args(settings: Settings, parsed: argparse.Namespace) -> Settings:
    overrides = {}
    if parsed.file:
        overrides["todo_path"] = Path(parsed.file).expanduser()
    if parsed.log_level:
        overrides["log_level"] = parsed.log_level.upper()
    if not overrides:
        return settings
    return dataclasses.replace(settings, **overrides)


def main(args: list[str] | None = None) -> None:
    parsed = create_parser().parse_args(args)
    settings = _apply_args(get_settings(), parsed)

    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s (file=%s)...", settings.app_name, settings.todo_path)

    state = create_initial_state(settings=settings)

    try:
        load_tasks(state)
    except CorruptStateError as e:
        logger.info("Refusing to start with unreadable task file: %s", e)
        raise SystemExit(
            f"Error loading tasks: {e}\n"
            "Fix or move the file away and start again; it was left untouched."
        ) from e

    run_console_loop(state)
    logger.info("Bye.")


if __name__ == "__main__":
    main()
