# src/todo_tracker/tasks/task_file.py

"""
JSON task file.

Layout on disk:

    {
      "tasks": [
        {"id": 1, "description": "...", "completed": false, "created_at": "..."},
        {"id": 2, "description": "...", "completed": true,
         "created_at": "...", "completed_at": "..."}
      ],
      "next_id": 3
    }

Timestamps are ISO 8601 / RFC 3339 strings. `completed_at` is omitted while a
task is pending.

Writes go to a sibling temp file which is then moved over the target with
os.replace, so the file on disk is always either the previous or the new
complete state.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from .errors import CorruptStateError, WriteFailedError
from .task_models import Task, TaskSnapshot

logger = logging.getLogger(__name__)


def _ts_to_str(ts: datetime) -> str:
    return ts.isoformat()


def _str_to_ts(raw: Any, field_name: str, task_id: Any) -> datetime:
    if not isinstance(raw, str):
        raise ValueError(f"task {task_id}: {field_name} must be a string")
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"task {task_id}: invalid {field_name} {raw!r}") from None
    if ts.tzinfo is None:
        # Naive timestamps are taken as local time.
        ts = ts.astimezone()
    return ts


def task_to_record(task: Task) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": task.id,
        "description": task.description,
        "completed": task.completed,
        "created_at": _ts_to_str(task.created_at),
    }
    if task.completed_at is not None:
        record["completed_at"] = _ts_to_str(task.completed_at)
    return record


def record_to_task(record: Any) -> Task:
    if not isinstance(record, dict):
        raise ValueError("task record must be an object")

    task_id = record.get("id")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
        raise ValueError(f"invalid task id {task_id!r}")

    description = record.get("description")
    if not isinstance(description, str):
        raise ValueError(f"task {task_id}: description must be a string")

    completed = record.get("completed", False)
    if not isinstance(completed, bool):
        raise ValueError(f"task {task_id}: completed must be true or false")

    created_at = _str_to_ts(record.get("created_at"), "created_at", task_id)

    raw_completed_at = record.get("completed_at")
    completed_at = None
    if raw_completed_at is not None:
        completed_at = _str_to_ts(raw_completed_at, "completed_at", task_id)

    if completed != (completed_at is not None):
        raise ValueError(f"task {task_id}: completed_at must be set iff the task is completed")

    return Task(
        id=task_id,
        description=description,
        created_at=created_at,
        completed=completed,
        completed_at=completed_at,
    )


def snapshot_to_dict(snapshot: TaskSnapshot) -> dict[str, Any]:
    return {
        "tasks": [task_to_record(t) for t in snapshot.tasks],
        "next_id": snapshot.next_id,
    }


def snapshot_from_dict(data: Any) -> TaskSnapshot:
    """
    Validate decoded JSON and build a snapshot.

    Raises ValueError describing the first problem found.
    """
    if not isinstance(data, dict):
        raise ValueError("top level must be an object")

    raw_tasks = data.get("tasks", [])
    if raw_tasks is None:
        raw_tasks = []
    if not isinstance(raw_tasks, list):
        raise ValueError("'tasks' must be a list")

    tasks: list[Task] = []
    seen: set[int] = set()
    for raw in raw_tasks:
        task = record_to_task(raw)
        if task.id in seen:
            raise ValueError(f"duplicate task id {task.id}")
        seen.add(task.id)
        tasks.append(task)

    floor = max(seen, default=0) + 1
    next_id = data.get("next_id")
    if next_id is None:
        next_id = floor
    elif not isinstance(next_id, int) or isinstance(next_id, bool):
        raise ValueError(f"'next_id' must be an integer, got {next_id!r}")
    elif next_id < floor:
        logger.warning("next_id=%s is not above the largest task id; using %s", next_id, floor)
        next_id = floor

    return TaskSnapshot(tasks=tasks, next_id=next_id)


class TaskFile:
    """Load/save a TaskSnapshot as one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TaskSnapshot:
        """
        Read the file.

        - missing file -> empty snapshot (first run)
        - unreadable / invalid JSON / wrong shape -> CorruptStateError
        """
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.info("Task file %s does not exist yet; starting empty.", self._path)
            return TaskSnapshot()
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptStateError(self._path, f"cannot read file: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(self._path, f"invalid JSON: {e}") from e

        try:
            snapshot = snapshot_from_dict(data)
        except ValueError as e:
            raise CorruptStateError(self._path, str(e)) from e

        logger.debug(
            "Loaded %d tasks (next_id=%s) from %s",
            len(snapshot.tasks),
            snapshot.next_id,
            self._path,
        )
        return snapshot

    def save(self, snapshot: TaskSnapshot) -> None:
        """Write the full snapshot, replacing the previous file in one step."""
        payload = json.dumps(snapshot_to_dict(snapshot), ensure_ascii=False, indent=2) + "\n"
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            logger.warning("Failed to save tasks to %s: %s", self._path, e)
            raise WriteFailedError(self._path, e.strerror or str(e)) from e

        with contextlib.suppress(OSError):
            # Best-effort: personal data, keep the file private on disk.
            os.chmod(self._path, 0o600)
        logger.debug(
            "Saved %d tasks (next_id=%s) to %s",
            len(snapshot.tasks),
            snapshot.next_id,
            self._path,
        )
