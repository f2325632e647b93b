# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..core.state import AppState
from ..tasks.errors import TaskError
from ..tasks.task_models import Task, TaskStats

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M"
QUIT_COMMANDS = frozenset({"quit", "exit", "q"})


class UsageError(Exception):
    """Bad command arguments; the message is shown to the user as-is."""


@dataclass(frozen=True, slots=True)
class CommandReply:
    text: str
    # True when the command changed the task list and the caller should save.
    changed: bool = False


@dataclass(frozen=True, slots=True)
class _Command:
    handler: CommandHandler
    help_text: str
    usage: str
    mutating: bool


class CommandRegistry:
    """Command registry used by the console loop (add, list, complete, ...)."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        usage: str = "",
        mutating: bool = False,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        cmd = _Command(handler=handler, help_text=help_text, usage=usage, mutating=mutating)
        self._commands[key] = cmd
        self._help[key] = f"{key} {usage}".strip()
        for alias in aliases:
            self._commands[alias.lower()] = cmd

    def handle(self, state: AppState, line: str) -> CommandReply | None:
        """
        Handle a string like "command args".
        Returns None for a blank line.

        UsageError and TaskError become plain replies; the task list is
        unchanged in both cases.
        """
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return None

        name = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        cmd = self._commands.get(name)
        if cmd is None:
            return CommandReply(f"Unknown command: {name}. Use help to list available commands.")

        try:
            text = cmd.handler(state, arg)
        except UsageError as e:
            return CommandReply(str(e))
        except TaskError as e:
            logger.debug("Command %s failed: %s", name, e)
            return CommandReply(f"Error: {e}")

        return CommandReply(text, changed=cmd.mutating)

    def build_help(self) -> str:
        width = max((len(s) for s in self._help.values()), default=0)
        lines = ["Commands:"]
        for key, signature in self._help.items():
            lines.append(f"  {signature.ljust(width)}  - {self._commands[key].help_text}")
        lines.append(f"  {'quit'.ljust(width)}  - Save and exit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----


def format_task(task: Task) -> str:
    status = "[✓]" if task.completed else "[ ]"
    lines = [
        f"{status} {task.id}: {task.description}",
        f"    Created: {task.created_at.strftime(TIME_FORMAT)}",
    ]
    if task.completed and task.completed_at is not None:
        lines.append(f"    Completed: {task.completed_at.strftime(TIME_FORMAT)}")
    return "\n".join(lines)


def format_task_list(tasks: Iterable[Task]) -> str:
    blocks = [format_task(t) for t in tasks]
    if not blocks:
        return "No tasks found."
    return "=== TODO LIST ===\n" + "\n\n".join(blocks)


def format_stats(stats: TaskStats) -> str:
    lines = [
        "=== STATISTICS ===",
        f"Total tasks: {stats.total}",
        f"Completed: {stats.completed}",
        f"Pending: {stats.pending}",
    ]
    rate = stats.completion_rate
    if rate is not None:
        lines.append(f"Completion rate: {rate:.1f}%")
    return "\n".join(lines)


def format_stats_line(stats: TaskStats) -> str:
    return f"Stats: {stats.total} total, {stats.completed} completed, {stats.pending} pending"


def _parse_task_id(arg: str) -> int:
    if not arg:
        raise UsageError("Please provide a task ID.")
    try:
        return int(arg)
    except ValueError:
        raise UsageError("Invalid task ID. Please enter a number.") from None


# ---- handlers ----


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, arg: str) -> str:
    if not arg:
        raise UsageError("Please provide a task description.")
    task = state.task_store.add_task(arg)
    return f"Task {task.id} added successfully!"


def cmd_list(state: AppState, arg: str) -> str:
    return format_task_list(state.task_store.list_tasks(include_completed=False))


def cmd_listall(state: AppState, arg: str) -> str:
    return format_task_list(state.task_store.list_tasks(include_completed=True))


def cmd_complete(state: AppState, arg: str) -> str:
    task_id = _parse_task_id(arg)
    state.task_store.complete_task(task_id)
    return f"Task {task_id} marked as completed!"


def cmd_delete(state: AppState, arg: str) -> str:
    task_id = _parse_task_id(arg)
    state.task_store.delete_task(task_id)
    return f"Task {task_id} deleted successfully!"


def cmd_stats(state: AppState, arg: str) -> str:
    return format_stats(state.task_store.stats())


registry.register("add", cmd_add, "Add a new task.", usage="<description>", mutating=True)
registry.register("list", cmd_list, "List pending tasks.")
registry.register("listall", cmd_listall, "List all tasks.")
registry.register(
    "complete", cmd_complete, "Mark a task as completed.", usage="<id>", mutating=True
)
registry.register("delete", cmd_delete, "Delete a task.", usage="<id>", mutating=True)
registry.register("stats", cmd_stats, "Show statistics.")
registry.register("help", cmd_help, "Show available commands.", aliases=["h", "?"])
