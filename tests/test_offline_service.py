# tests/test_offline_service.py

from __future__ import annotations

from datetime import date

import pytest

from taskline.constants import ERROR_INVALID_DATE_FORMAT
from taskline.remote.errors import RemoteRejectedError
from taskline.remote.offline import OfflineTaskService
from taskline.tasks.task_models import DueUpdateRequest, ResolvedDueFields

TODAY = date(2026, 3, 11)  # Wednesday


def make_service() -> OfflineTaskService:
    service = OfflineTaskService(today=TODAY, seed_demo_tasks=False)
    service.add_remote_task("r1", "Pay rent", ResolvedDueFields(due_date="2026-03-01", deadline="2026-03-31"))
    return service


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("due_string", "expected_date", "recurring"),
    [
        ("today", "2026-03-11", False),
        ("tomorrow", "2026-03-12", False),
        ("yesterday", "2026-03-10", False),
        ("2026-04-01", "2026-04-01", False),
        ("friday", "2026-03-13", False),
        ("wednesday", "2026-03-11", False),
        ("next wednesday", "2026-03-18", False),
        ("every monday", "2026-03-16", True),
    ],
)
async def test_resolves_small_vocabulary(due_string: str, expected_date: str, recurring: bool) -> None:
    service = make_service()

    fields = await service.update_task("r1", DueUpdateRequest(due_string=due_string))

    assert fields.due_date == expected_date
    assert fields.is_recurring is recurring
    assert fields.deadline == "2026-03-31"


@pytest.mark.asyncio
async def test_no_date_clears_due_but_keeps_deadline() -> None:
    service = make_service()

    fields = await service.update_task("r1", DueUpdateRequest(due_string="no date"))

    assert fields == ResolvedDueFields(deadline="2026-03-31")


@pytest.mark.asyncio
async def test_unparseable_input_is_rejected() -> None:
    service = make_service()
    with pytest.raises(RemoteRejectedError) as exc_info:
        await service.update_task("r1", DueUpdateRequest(due_string="blorp"))
    assert exc_info.value.status_code == 400
    assert str(exc_info.value) == f"{ERROR_INVALID_DATE_FORMAT}: blorp"


@pytest.mark.asyncio
async def test_unknown_task_is_rejected() -> None:
    service = make_service()
    with pytest.raises(RemoteRejectedError) as exc_info:
        await service.update_task("nope", DueUpdateRequest(due_string="today"))
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_update_is_visible_in_listing() -> None:
    service = make_service()
    await service.update_task("r1", DueUpdateRequest(due_date="2026-05-05"))

    (task,) = await service.list_tasks()
    assert task.due.due_date == "2026-05-05"


@pytest.mark.asyncio
async def test_demo_tasks_are_seeded_by_default() -> None:
    tasks = await OfflineTaskService(today=TODAY).list_tasks()
    assert [t.remote_id for t in tasks] == ["demo-1", "demo-2", "demo-3"]
