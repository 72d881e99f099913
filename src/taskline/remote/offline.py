# src/taskline/remote/offline.py

from __future__ import annotations

import re
from dataclasses import replace
from datetime import date, timedelta

from ..constants import ERROR_INVALID_DATE_FORMAT
from ..tasks.task_models import DueUpdateRequest, RemoteTask, ResolvedDueFields
from ..utils.dates import NO_DATE, format_ymd, next_weekday
from .errors import RemoteRejectedError

_WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEMO_TASKS = (
    ("demo-1", "Pay rent"),
    ("demo-2", "Book dentist appointment"),
    ("demo-3", "Water the plants"),
)


class OfflineTaskService:
    """
    In-memory TaskService used for demos when no API token is configured.

    Behavior:
    - knows a handful of demo tasks (plus any added via add_remote_task)
    - resolves only a tiny vocabulary: "no date", today/tomorrow/yesterday,
      "[next|every] <weekday>" and YYYY-MM-DD; anything else is rejected the way
      the real service rejects unparseable input
    - the deadline field is kept as-is (due strings never change it)
    """

    def __init__(self, *, today: date | None = None, seed_demo_tasks: bool = True) -> None:
        self._today = today
        self._tasks: dict[str, RemoteTask] = {}
        if seed_demo_tasks:
            for remote_id, content in DEMO_TASKS:
                self.add_remote_task(remote_id, content)

    def add_remote_task(self, remote_id: str, content: str, due: ResolvedDueFields | None = None) -> None:
        self._tasks[remote_id] = RemoteTask(remote_id=remote_id, content=content, due=due or ResolvedDueFields())

    def _resolve(self, text: str, current: ResolvedDueFields) -> ResolvedDueFields:
        today = self._today or date.today()
        words = text.strip().lower().split()
        phrase = " ".join(words)

        if phrase == NO_DATE:
            return ResolvedDueFields(deadline=current.deadline)
        if phrase == "today":
            return ResolvedDueFields(due_date=format_ymd(today), deadline=current.deadline)
        if phrase == "tomorrow":
            return ResolvedDueFields(due_date=format_ymd(today + timedelta(days=1)), deadline=current.deadline)
        if phrase == "yesterday":
            return ResolvedDueFields(due_date=format_ymd(today - timedelta(days=1)), deadline=current.deadline)
        if _ISO_DATE_RE.match(phrase):
            try:
                date.fromisoformat(phrase)
            except ValueError:
                raise RemoteRejectedError(f"{ERROR_INVALID_DATE_FORMAT}: {text}", status_code=400) from None
            return ResolvedDueFields(due_date=phrase, deadline=current.deadline)

        modifier = words[0] if len(words) == 2 else None
        name = words[-1] if len(words) in (1, 2) else ""
        if name in _WEEKDAYS and modifier in (None, "next", "every"):
            weekday = _WEEKDAYS[name]
            if modifier == "next":
                # strictly after today
                d = next_weekday(today, weekday)
            else:
                # on or after today
                d = next_weekday(today - timedelta(days=1), weekday)
            return ResolvedDueFields(
                due_date=format_ymd(d),
                is_recurring=modifier == "every",
                deadline=current.deadline,
            )

        raise RemoteRejectedError(f"{ERROR_INVALID_DATE_FORMAT}: {text}", status_code=400)

    async def update_task(self, remote_id: str, request: DueUpdateRequest) -> ResolvedDueFields:
        task = self._tasks.get(remote_id)
        if task is None:
            raise RemoteRejectedError("Task not found", status_code=404)

        if request.due_string is not None:
            fields = self._resolve(request.due_string, task.due)
        elif request.due_date is not None:
            fields = ResolvedDueFields(due_date=request.due_date, deadline=task.due.deadline)
        else:
            dt = request.due_datetime or ""
            fields = ResolvedDueFields(due_date=dt[:10], due_datetime=dt, deadline=task.due.deadline)

        self._tasks[remote_id] = replace(task, due=fields)
        return fields

    async def list_tasks(self) -> list[RemoteTask]:
        return list(self._tasks.values())
