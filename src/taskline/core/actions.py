# src/taskline/core/actions.py

"""
Actions exchanged between the dialog automaton, the command layer and the task manager.

Each action is a small frozen dataclass; `Action` is the closed union of all of them.
Consumers dispatch with `match` on the concrete type.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ShowDueDateDialog:
    task_id: str


@dataclass(slots=True, frozen=True)
class HideDialog:
    pass


@dataclass(slots=True, frozen=True)
class SetTaskDueString:
    """Free-text due expression (already normalized, or NO_DATE) for the reconciler."""

    task_id: str
    due_string: str


@dataclass(slots=True, frozen=True)
class SetTaskDueDate:
    """Structured YYYY-MM-DD due date (quick presets such as today/tomorrow)."""

    task_id: str
    due_date: str
    success_message: str


@dataclass(slots=True, frozen=True)
class ShowNotice:
    message: str
    is_error: bool = False


Action = ShowDueDateDialog | HideDialog | SetTaskDueString | SetTaskDueDate | ShowNotice
