# src/taskline/remote/todoist.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..tasks.task_models import DueUpdateRequest, RemoteTask, ResolvedDueFields
from .errors import RemoteRejectedError, TransportFailureError

logger = logging.getLogger(__name__)


# Request timeout and rate limiting: the service is busy, not refusing the input.
_UNAVAILABLE_STATUSES = frozenset({408, 429})

# Safety net against a cursor that never ends.
_MAX_LIST_PAGES = 50


def _make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _error_message(response: httpx.Response) -> str:
    """The service's own error text, verbatim; Todoist answers plain text or {"error": ...}."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        msg = data.get("error") or data.get("message")
        if msg:
            return str(msg).strip()
    text = response.text.strip()
    return text or f"HTTP {response.status_code}"


class TodoistTaskService:
    """
    Async Todoist REST client implementing the TaskService port.

    One request per call: no retries here, the user retries by resubmitting.
    The client is created lazily so constructing the service never touches the network.
    """

    def __init__(
        self,
        *,
        api_token: str,
        base_url: str,
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_token or not api_token.strip():
            raise RuntimeError("Task service token is not set. Set TASKLINE_API_TOKEN in your .env.")
        if not base_url.strip():
            raise RuntimeError("Task service base URL is not set. Set TASKLINE_API_BASE_URL in your .env.")

        self._api_token = api_token.strip()
        self._base_url = base_url.rstrip("/")
        self._timeout = _make_timeout(connect_timeout, read_timeout)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> TodoistTaskService:
        return cls(
            api_token=str(settings.api_token or ""),
            base_url=str(settings.api_base_url),
            connect_timeout=float(settings.connect_timeout_seconds),
            read_timeout=float(settings.read_timeout_seconds),
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Authorization": f"Bearer {self._api_token}"},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        client = self._get_client()
        try:
            response = await client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            # Transport errors, undecodable bodies, redirect loops: all "service unavailable".
            logger.info("Task service request error on %s %s: %s", method, path, e.__class__.__name__)
            raise TransportFailureError(f"Task service unreachable: {e.__class__.__name__}") from e

        if response.status_code >= 500 or response.status_code in _UNAVAILABLE_STATUSES:
            logger.info("Task service unavailable (HTTP %s) on %s %s", response.status_code, method, path)
            raise TransportFailureError(f"Task service error: HTTP {response.status_code}")

        if response.status_code >= 400:
            message = _error_message(response)
            logger.info("Task service rejected %s %s: HTTP %s", method, path, response.status_code)
            raise RemoteRejectedError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportFailureError("Task service returned a malformed response") from e

    async def update_task(self, remote_id: str, request: DueUpdateRequest) -> ResolvedDueFields:
        data = await self._request("POST", f"/tasks/{remote_id}", json=request.to_payload())
        if not isinstance(data, dict):
            raise TransportFailureError("Task service returned no task after update")
        return ResolvedDueFields.from_remote(data)

    async def _list_raw_tasks(self) -> list[Any]:
        """
        All task objects from GET /tasks.

        REST v2 returns a plain list; the unified v1 API returns
        {"results": [...], "next_cursor": ...} pages.
        """
        items: list[Any] = []
        cursor: str | None = None
        for _ in range(_MAX_LIST_PAGES):
            data = await self._request("GET", "/tasks", params={"cursor": cursor} if cursor else None)
            if isinstance(data, list):
                return items + data
            if not isinstance(data, dict):
                raise TransportFailureError("Task service returned a malformed task list")
            items.extend(data.get("results") or [])
            cursor = data.get("next_cursor") or None
            if cursor is None:
                return items
        logger.warning("Task listing stopped after %d pages", _MAX_LIST_PAGES)
        return items

    async def list_tasks(self) -> list[RemoteTask]:
        out: list[RemoteTask] = []
        for item in await self._list_raw_tasks():
            if not isinstance(item, dict) or not item.get("id"):
                continue
            out.append(
                RemoteTask(
                    remote_id=str(item["id"]),
                    content=str(item.get("content") or "").strip() or "(untitled)",
                    due=ResolvedDueFields.from_remote(item),
                )
            )
        return out
