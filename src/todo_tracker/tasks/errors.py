# src/todo_tracker/tasks/errors.py

"""
Error taxonomy.

Everything here is an expected, recoverable condition that ends up as a
message to the user:
- TaskError: domain errors raised by TaskStore (unknown id, double complete);
- StorageError: the task file could not be decoded or written.
"""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """Base class for all todo_tracker errors."""


class TaskError(TodoError):
    """Recoverable domain error raised by the task store."""


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"task with ID {task_id} not found")


class TaskAlreadyCompletedError(TaskError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"task {task_id} is already completed")


class StorageError(TodoError):
    """The task file could not be read or written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class CorruptStateError(StorageError):
    """
    The task file exists but does not hold a valid task list.

    Never treated as an empty list: that would silently drop user data.
    """


class WriteFailedError(StorageError):
    """Saving failed; the in-memory state is intact and a later save may succeed."""
