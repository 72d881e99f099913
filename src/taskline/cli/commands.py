# src/taskline/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import cast

from ..constants import (
    ERROR_TASK_PULL_FAILED,
    SUCCESS_TASK_DUE_MONDAY,
    SUCCESS_TASK_DUE_SATURDAY,
    SUCCESS_TASK_DUE_TODAY,
    SUCCESS_TASK_DUE_TOMORROW,
    SUCCESS_TASKS_PULLED,
    UI_NO_TASK_SELECTED_DUE_DATE,
)
from ..core.actions import SetTaskDueDate, ShowDueDateDialog
from ..core.state import AppState
from ..remote.errors import TaskServiceError
from ..sync.pull import pull_remote_tasks
from ..tasks.task_models import Task
from ..utils.dates import (
    format_date_with_offset,
    format_human_date,
    format_human_datetime,
    format_today,
    format_ymd,
    next_weekday,
)

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

MONDAY = 0
SATURDAY = 5


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /due, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task(state: AppState, ref: str | None) -> Task | None:
    """Resolve "<n>" (1-based index from the last /tasks listing) or an id prefix."""
    if not ref:
        return None

    if ref.isdecimal():
        idx = int(ref) - 1
        if 0 <= idx < len(state.last_listing):
            return state.task_store.get_task(state.last_listing[idx])
        return None

    matches = state.task_store.find_by_id_prefix(ref)
    return matches[0] if len(matches) == 1 else None


def _describe_due(task: Task) -> str:
    if task.due_datetime:
        due = format_human_datetime(task.due_datetime)
    elif task.due_date:
        due = format_human_date(task.due_date)
    else:
        due = "-"
    if task.is_recurring:
        due += " (recurring)"
    if task.deadline:
        due += f" [deadline {format_human_date(task.deadline)}]"
    return due


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    mode = "OFFLINE (demo service)" if getattr(state.settings, "offline_mode", True) else "ONLINE"
    return (
        "Status:\n"
        f"  Service: {mode}\n"
        f"  Local tasks: {state.task_store.count_tasks()}\n"
        f"  Dialog open: {'yes' if state.dialog.is_open else 'no'}"
    )


def cmd_tasks(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    state.last_listing = [t.id for t in tasks]
    if not tasks:
        return "No local tasks. Use /pull to fetch tasks from the service."

    lines = ["Tasks:"]
    for i, t in enumerate(tasks, start=1):
        busy = " (updating...)" if state.task_manager.is_in_flight(t.id) else ""
        lines.append(f"  {i}. {t.content}  due: {_describe_due(t)}  [{t.id[:8]}]{busy}")
    return "\n".join(lines)


def cmd_pull(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("Pulling tasks from the service...")
    try:
        n = state.task_manager.call(pull_remote_tasks(state.task_store, state.task_service))
    except TaskServiceError as e:
        logger.info("Pull failed: %s", e)
        return f"{ERROR_TASK_PULL_FAILED}: {e}"
    return f"{SUCCESS_TASKS_PULLED}: {n}"


def cmd_due(state: AppState, args: list[str]) -> str:
    """
    /due <task>  -> open the due date dialog for the task
    """
    task = resolve_task(state, args[0] if args else None)
    if task is None:
        return UI_NO_TASK_SELECTED_DUE_DATE

    logger.info("Command: opening due date input for task %s", task.id)
    state.dialog.update(ShowDueDateDialog(task_id=task.id))
    return f"Due date for '{task.content}' (currently {_describe_due(task)}):"


def _quick_due(state: AppState, args: list[str], due_date: str, success_message: str) -> str:
    task = resolve_task(state, args[0] if args else None)
    if task is None:
        return UI_NO_TASK_SELECTED_DUE_DATE

    logger.info("Command: setting task %s due %s", task.id, due_date)
    accepted = state.task_manager.submit(
        SetTaskDueDate(task_id=task.id, due_date=due_date, success_message=success_message)
    )
    return f"Updating '{task.content}'..." if accepted else f"'{task.content}' is already being updated."


def cmd_today(state: AppState, args: list[str]) -> str:
    return _quick_due(state, args, format_today(), SUCCESS_TASK_DUE_TODAY)


def cmd_tomorrow(state: AppState, args: list[str]) -> str:
    return _quick_due(state, args, format_date_with_offset(1), SUCCESS_TASK_DUE_TOMORROW)


def cmd_nextweek(state: AppState, args: list[str]) -> str:
    return _quick_due(state, args, format_ymd(next_weekday(date.today(), MONDAY)), SUCCESS_TASK_DUE_MONDAY)


def cmd_weekend(state: AppState, args: list[str]) -> str:
    return _quick_due(state, args, format_ymd(next_weekday(date.today(), SATURDAY)), SUCCESS_TASK_DUE_SATURDAY)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show service mode and local task count.")
registry.register("tasks", cmd_tasks, help_text="List local tasks.", aliases=["ls"])
registry.register("pull", cmd_pull, help_text="Fetch tasks from the task service.")
registry.register("due", cmd_due, help_text="Set a due date in natural language: /due <task>.", aliases=["s"])
registry.register("today", cmd_today, help_text="Make a task due today: /today <task>.", aliases=["t"])
registry.register("tomorrow", cmd_tomorrow, help_text="Make a task due tomorrow: /tomorrow <task>.", aliases=["tm"])
registry.register("nextweek", cmd_nextweek, help_text="Make a task due next Monday: /nextweek <task>.", aliases=["nw"])
registry.register("weekend", cmd_weekend, help_text="Make a task due Saturday: /weekend <task>.", aliases=["we"])
