# tests/test_todoist_client.py

from __future__ import annotations

import json

import httpx
import pytest

from taskline.remote.errors import RemoteRejectedError, TransportFailureError
from taskline.remote.todoist import TodoistTaskService
from taskline.sync.reconciler import DueReconciler, OutcomeStatus
from taskline.tasks.task_models import DueUpdateRequest, ResolvedDueFields
from taskline.tasks.task_store import TaskStore

BASE_URL = "https://api.example.test/rest/v2"


def make_service(handler) -> TodoistTaskService:
    return TodoistTaskService(
        api_token="secret-token",
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )


def test_missing_token_is_a_configuration_error() -> None:
    with pytest.raises(RuntimeError):
        TodoistTaskService(api_token="  ", base_url=BASE_URL)


@pytest.mark.asyncio
async def test_update_posts_only_due_string() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "id": "42",
                "content": "Pay rent",
                "due": {"date": "2026-03-13", "is_recurring": False, "string": "next friday"},
                "deadline": None,
            },
        )

    service = make_service(handler)
    fields = await service.update_task("42", DueUpdateRequest(due_string="next friday"))
    await service.aclose()

    assert fields == ResolvedDueFields(due_date="2026-03-13")
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/rest/v2/tasks/42"
    assert request.headers["Authorization"] == "Bearer secret-token"
    assert json.loads(request.content) == {"due_string": "next friday"}


@pytest.mark.asyncio
async def test_update_with_structured_date() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"id": "42", "due": {"date": "2026-03-11"}})

    service = make_service(handler)
    await service.update_task("42", DueUpdateRequest(due_date="2026-03-11"))
    await service.aclose()

    assert bodies == [{"due_date": "2026-03-11"}]


@pytest.mark.asyncio
async def test_client_error_is_rejection_with_service_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Invalid date format")

    service = make_service(handler)
    with pytest.raises(RemoteRejectedError) as exc_info:
        await service.update_task("42", DueUpdateRequest(due_string="blorp"))
    await service.aclose()

    assert str(exc_info.value) == "Invalid date format"
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_client_error_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "Task not found"})

    service = make_service(handler)
    with pytest.raises(RemoteRejectedError, match="Task not found"):
        await service.update_task("42", DueUpdateRequest(due_string="today"))
    await service.aclose()


@pytest.mark.asyncio
async def test_server_error_is_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="upstream down")

    service = make_service(handler)
    with pytest.raises(TransportFailureError):
        await service.update_task("42", DueUpdateRequest(due_string="today"))
    await service.aclose()


@pytest.mark.asyncio
async def test_network_error_is_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = make_service(handler)
    with pytest.raises(TransportFailureError):
        await service.update_task("42", DueUpdateRequest(due_string="today"))
    await service.aclose()


@pytest.mark.asyncio
async def test_list_tasks_accepts_list_and_results_wrapper() -> None:
    items = [
        {"id": "1", "content": "Pay rent", "due": {"date": "2026-03-01", "is_recurring": True}},
        {"id": "2", "content": "  ", "due": None},
        {"content": "no id, skipped"},
    ]
    payloads = [items, {"results": items}]

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/rest/v2/tasks"
        return httpx.Response(200, json=payloads.pop(0))

    service = make_service(handler)
    plain = await service.list_tasks()
    wrapped = await service.list_tasks()
    await service.aclose()

    assert plain == wrapped
    assert [t.remote_id for t in plain] == ["1", "2"]
    assert plain[0].due == ResolvedDueFields(due_date="2026-03-01", is_recurring=True)
    assert plain[1].content == "(untitled)"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [408, 429])
async def test_busy_service_is_transport_failure(status: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text="Too many requests")

    service = make_service(handler)
    with pytest.raises(TransportFailureError):
        await service.update_task("42", DueUpdateRequest(due_string="today"))
    await service.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [httpx.DecodingError("bad gzip"), httpx.TooManyRedirects("redirect loop")],
)
async def test_other_request_errors_are_transport_failures(error: httpx.RequestError) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise error

    service = make_service(handler)
    with pytest.raises(TransportFailureError):
        await service.update_task("42", DueUpdateRequest(due_string="today"))
    await service.aclose()


def _rate_limited(request: httpx.Request) -> httpx.Response:
    return httpx.Response(429, text="Too many requests")


def _garbled_body(request: httpx.Request) -> httpx.Response:
    raise httpx.DecodingError("bad gzip", request=request)


@pytest.mark.asyncio
@pytest.mark.parametrize("handler", [_rate_limited, _garbled_body])
async def test_reconciler_reports_busy_or_broken_service_as_retryable(
    handler, store: TaskStore, seeded_task_id: str
) -> None:
    before = store.get_task(seeded_task_id)
    service = make_service(handler)

    outcome = await DueReconciler(store, service).set_task_due_string(seeded_task_id, "tomorrow")
    await service.aclose()

    assert outcome.status == OutcomeStatus.FAILED
    assert outcome.retryable is True
    assert store.get_task(seeded_task_id) == before


@pytest.mark.asyncio
async def test_list_tasks_follows_cursor_pages() -> None:
    cursors: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        cursor = request.url.params.get("cursor")
        cursors.append(cursor)
        if cursor is None:
            return httpx.Response(
                200,
                json={"results": [{"id": "1", "content": "First"}], "next_cursor": "page-2"},
            )
        return httpx.Response(
            200,
            json={
                "results": [{"id": "2", "content": "Second", "deadline": {"date": "2026-04-30"}}],
                "next_cursor": None,
            },
        )

    service = make_service(handler)
    tasks = await service.list_tasks()
    await service.aclose()

    assert cursors == [None, "page-2"]
    assert [t.remote_id for t in tasks] == ["1", "2"]
    assert tasks[1].due.deadline == "2026-04-30"
