# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple


def local_now() -> datetime:
    """Current time as a timezone-aware datetime in the local zone."""
    return datetime.now().astimezone()


@dataclass(slots=True)
class Task:
    id: int
    description: str
    created_at: datetime

    completed: bool = False
    completed_at: datetime | None = None


class TaskStats(NamedTuple):
    total: int
    completed: int
    pending: int

    @property
    def completion_rate(self) -> float | None:
        """Percentage of completed tasks, or None for an empty list."""
        if self.total == 0:
            return None
        return self.completed / self.total * 100


@dataclass(slots=True)
class TaskSnapshot:
    """Full persisted state of a task list."""

    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1
