# src/taskline/sync/reconciler.py

"""
Due-date reconciliation.

Sends a due update to the remote service and mirrors the *resolved* fields the
service returns into the local store. The user's text is never written locally:
"next fri" becomes whatever date the service decided on.

Invariants:
- a request carries either a free-text due string or a structured date, never both,
- due_date, due_datetime, is_recurring and deadline are written together in one
  statement, including cleared (None) values,
- nothing is written when the service fails or the task vanished locally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from ..constants import (
    ERROR_SERVICE_UNAVAILABLE,
    ERROR_TASK_DUE_DATE_FAILED,
    ERROR_TASK_NOT_FOUND,
    SUCCESS_TASK_DUE_STRING_SET,
)
from ..core.ports import TaskRepo, TaskService
from ..logging_setup import redact_user_text_for_log, sanitize_for_log
from ..remote.errors import RemoteRejectedError, TransportFailureError
from ..tasks.task_models import DueUpdateRequest, ResolvedDueFields

logger = logging.getLogger(__name__)


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    FAILED = "failed"
    NOT_FOUND = "not_found"


@dataclass(slots=True, frozen=True)
class Outcome:
    status: OutcomeStatus
    message: str
    retryable: bool = False
    fields: ResolvedDueFields | None = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


class DueReconciler:
    def __init__(self, store: TaskRepo, service: TaskService, *, log_raw_user_content: bool = False) -> None:
        self._store = store
        self._service = service
        self._log_raw = log_raw_user_content

    async def set_task_due_string(self, task_id: str, due_string: str) -> Outcome:
        """Update the due date from a free-text expression (or the NO_DATE sentinel)."""
        logger.info(
            "Reconcile: due string %s for task %s", redact_user_text_for_log(due_string), task_id
        )
        if self._log_raw:
            logger.debug("Reconcile: raw due string for %s: %s", task_id, sanitize_for_log(due_string))

        return await self._reconcile(
            task_id,
            DueUpdateRequest(due_string=due_string),
            success_message=f"{SUCCESS_TASK_DUE_STRING_SET}: {due_string}",
        )

    async def set_task_due_date(self, task_id: str, due_date: str, success_message: str) -> Outcome:
        """Update the due date with a structured YYYY-MM-DD value (quick presets)."""
        logger.info("Reconcile: due date %s for task %s", due_date, task_id)
        return await self._reconcile(
            task_id,
            DueUpdateRequest(due_date=due_date),
            success_message=f"{success_message}: {due_date}",
        )

    async def _reconcile(self, task_id: str, request: DueUpdateRequest, *, success_message: str) -> Outcome:
        remote_id = self._store.get_remote_id(task_id)
        if remote_id is None:
            logger.info("Reconcile: task %s not found locally", task_id)
            return Outcome(OutcomeStatus.NOT_FOUND, f"{ERROR_TASK_NOT_FOUND}: {task_id}")

        try:
            fields = await self._service.update_task(remote_id, request)
        except RemoteRejectedError as e:
            logger.info("Reconcile: service rejected update for task %s (status=%s)", task_id, e.status_code)
            return Outcome(OutcomeStatus.FAILED, f"{ERROR_TASK_DUE_DATE_FAILED}: {e}")
        except TransportFailureError as e:
            logger.warning("Reconcile: transport failure for task %s: %s", task_id, e)
            return Outcome(OutcomeStatus.FAILED, ERROR_SERVICE_UNAVAILABLE, retryable=True)

        if not self._store.apply_due_fields(task_id, fields):
            # Deleted while the request was in flight; the response is discarded.
            logger.info("Reconcile: task %s deleted during update, discarding response", task_id)
            return Outcome(OutcomeStatus.NOT_FOUND, f"{ERROR_TASK_NOT_FOUND}: {task_id}")

        logger.info(
            "Reconcile: task %s due_date=%s due_datetime=%s recurring=%s deadline=%s",
            task_id,
            fields.due_date,
            fields.due_datetime,
            fields.is_recurring,
            fields.deadline,
        )
        return Outcome(OutcomeStatus.SUCCESS, success_message, fields=fields)
