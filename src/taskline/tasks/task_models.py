# src/taskline/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Task:
    """Local task record. `id` is the stable local identity; `remote_id` is the service's."""

    id: str
    remote_id: str
    content: str
    created_at: float
    updated_at: float

    due_date: str | None = None
    due_datetime: str | None = None
    is_recurring: bool = False
    deadline: str | None = None


@dataclass(slots=True, frozen=True)
class ResolvedDueFields:
    """
    Due attributes as resolved by the remote service.

    None means "cleared": the reconciler writes it as a clear, it never skips it.
    """

    due_date: str | None = None
    due_datetime: str | None = None
    is_recurring: bool = False
    deadline: str | None = None

    @classmethod
    def from_remote(cls, payload: dict[str, Any]) -> ResolvedDueFields:
        """
        Build from a Todoist task JSON object.

        Newer API versions put a full timestamp into `due.date` for timed tasks;
        in that case the date part goes to due_date and the full value to due_datetime.
        """
        due = payload.get("due") or {}
        deadline = payload.get("deadline") or {}

        raw_date = due.get("date") or None
        due_datetime = due.get("datetime") or None
        if raw_date and "T" in raw_date:
            due_datetime = due_datetime or raw_date
            raw_date = raw_date[:10]

        return cls(
            due_date=raw_date,
            due_datetime=due_datetime,
            is_recurring=bool(due.get("is_recurring", False)),
            deadline=deadline.get("date") or None,
        )


@dataclass(slots=True, frozen=True)
class DueUpdateRequest:
    """
    Update payload for the remote service.

    Mutual exclusivity: either the free-text `due_string` or one structured slot
    (`due_date` / `due_datetime`) is populated, never both. Locale is never sent;
    the service falls back to the account language.
    """

    due_string: str | None = None
    due_date: str | None = None
    due_datetime: str | None = None

    def __post_init__(self) -> None:
        populated = [v for v in (self.due_string, self.due_date, self.due_datetime) if v is not None]
        if len(populated) != 1:
            raise ValueError(
                "DueUpdateRequest needs exactly one of due_string, due_date, due_datetime"
            )

    def to_payload(self) -> dict[str, str]:
        if self.due_string is not None:
            return {"due_string": self.due_string}
        if self.due_date is not None:
            return {"due_date": self.due_date}
        return {"due_datetime": self.due_datetime or ""}


@dataclass(slots=True, frozen=True)
class RemoteTask:
    remote_id: str
    content: str
    due: ResolvedDueFields
