# tests/test_bootstrap.py

from __future__ import annotations

import json

from todo_tracker.cli.bootstrap import create_initial_state, load_tasks


def test_create_initial_state_prepares_data_dir(settings) -> None:
    assert settings.log_to_file is False
    state = create_initial_state(settings=settings)

    assert settings.data_dir.is_dir()
    assert state.task_store.path == settings.todo_path
    assert len(state.task_store) == 0


def test_load_tasks_hydrates_store(settings) -> None:
    settings.todo_path.write_text(
        json.dumps(
            {
                "tasks": [
                    {
                        "id": 2,
                        "description": "Walk dog",
                        "completed": False,
                        "created_at": "2026-10-18T09:30:00+02:00",
                    }
                ],
                "next_id": 3,
            }
        ),
        "utf-8",
    )
    state = create_initial_state(settings=settings)
    load_tasks(state)

    assert [t.id for t in state.task_store] == [2]
    assert state.task_store.next_id == 3
