# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the task store into AppState and hydrates it from disk.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(
        settings=settings,
        task_store=TaskStore(settings.todo_path),
    )


def load_tasks(state: AppState) -> None:
    """
    Hydrate the store from its file.

    CorruptStateError propagates: the caller must not continue with an empty
    list, or the next save would overwrite the user's data.
    """
    state.task_store.load()
    stats = state.task_store.stats()
    logger.info(
        "Loaded %d tasks (%d pending) from %s",
        stats.total,
        stats.pending,
        state.task_store.path,
    )
