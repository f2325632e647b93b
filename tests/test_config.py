# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from todo_tracker.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("TODO_APP_NAME", "TODO_LOG_LEVEL", "TODO_LOG_TO_FILE", "TODO_DATA_DIR", "TODO_FILE"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.app_name == "todo"
    assert s.log_level == "WARNING"
    assert s.log_to_file is True
    assert s.data_dir == Path(".local/todo")
    assert s.todo_path == Path("todos.json")


def test_env_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TODO_APP_NAME", "chores")
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")
    monkeypatch.setenv("TODO_LOG_TO_FILE", "off")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("TODO_FILE", str(tmp_path / "mine.json"))

    s = Settings.from_env()
    assert s.app_name == "chores"
    assert s.log_level == "DEBUG"
    assert s.log_to_file is False
    assert s.data_dir == tmp_path / "data"
    assert s.todo_path == tmp_path / "mine.json"


def test_blank_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("TODO_FILE", "  ")
    monkeypatch.setenv("TODO_LOG_TO_FILE", "")
    s = Settings.from_env()
    assert s.todo_path == Path("todos.json")
    assert s.log_to_file is True
