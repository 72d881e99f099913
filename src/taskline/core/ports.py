# src/taskline/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The reconciler depends on two narrow Protocols instead of concrete implementations:
the remote task service and the local task store. Tests substitute deterministic fakes.
"""

from typing import Protocol

from ..tasks.task_models import DueUpdateRequest, RemoteTask, ResolvedDueFields, Task


class TaskService(Protocol):
    """Remote task service (Todoist-compatible)."""

    async def update_task(self, remote_id: str, request: DueUpdateRequest) -> ResolvedDueFields: ...

    async def list_tasks(self) -> list[RemoteTask]: ...


class TaskRepo(Protocol):
    """Local task store."""

    def get_task(self, task_id: str) -> Task | None: ...

    def get_remote_id(self, task_id: str) -> str | None: ...

    def apply_due_fields(self, task_id: str, fields: ResolvedDueFields) -> bool:
        """Write all four due fields atomically. Returns False if the task no longer exists."""
        ...

    def upsert_remote_task(self, remote: RemoteTask) -> str: ...
