# src/todo_tracker/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from .errors import TaskAlreadyCompletedError, TaskNotFoundError
from .task_file import TaskFile
from .task_models import Task, TaskSnapshot, TaskStats, local_now

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory ordered task list plus the id counter.

    - tasks keep insertion order; nothing re-sorts them
    - ids come from next_id, which only grows, so deleted ids are never reused
    - lookups are linear scans (personal-scale lists)

    Construction does no I/O. load()/save() go through a TaskFile bound to
    `filename`.
    """

    def __init__(self, filename: str | Path = "todos.json") -> None:
        self._file = TaskFile(filename)
        self._tasks: list[Task] = []
        self._next_id = 1

    @property
    def path(self) -> Path:
        return self._file.path

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    # ---- low-level helpers ----

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    # ---- public API ----

    def get_task(self, task_id: int) -> Task | None:
        try:
            return self._tasks[self._index_of(task_id)]
        except TaskNotFoundError:
            return None

    def add_task(self, description: str, *, now: datetime | None = None) -> Task:
        if now is None:
            now = local_now()

        task = Task(id=self._next_id, description=description, created_at=now)
        self._tasks.append(task)
        self._next_id += 1
        logger.debug("Task added id=%s", task.id)
        return task

    def complete_task(self, task_id: int, *, now: datetime | None = None) -> Task:
        task = self._tasks[self._index_of(task_id)]
        if task.completed:
            raise TaskAlreadyCompletedError(task_id)

        if now is None:
            now = local_now()
        # A clock that stepped backwards must not produce completed_at < created_at.
        task.completed_at = max(now, task.created_at)
        task.completed = True
        logger.debug("Task completed id=%s", task_id)
        return task

    def delete_task(self, task_id: int) -> Task:
        task = self._tasks.pop(self._index_of(task_id))
        logger.debug("Task deleted id=%s", task_id)
        return task

    def list_tasks(self, *, include_completed: bool = True) -> list[Task]:
        """Tasks in store order; pending only when include_completed is False."""
        if include_completed:
            return list(self._tasks)
        return [t for t in self._tasks if not t.completed]

    def stats(self) -> TaskStats:
        completed = sum(1 for t in self._tasks if t.completed)
        return TaskStats(
            total=len(self._tasks),
            completed=completed,
            pending=len(self._tasks) - completed,
        )

    # ---- persistence ----

    def snapshot(self) -> TaskSnapshot:
        return TaskSnapshot(tasks=list(self._tasks), next_id=self._next_id)

    def load(self) -> None:
        """
        Replace tasks and next_id with the file contents.

        A missing file yields an empty list. On CorruptStateError the store is
        left unchanged.
        """
        snapshot = self._file.load()
        self._tasks = list(snapshot.tasks)
        self._next_id = snapshot.next_id
        logger.info("TaskStore loaded file=%s total=%s", self.path, len(self._tasks))

    def save(self) -> None:
        """Persist the full state. Raises WriteFailedError."""
        self._file.save(self.snapshot())
