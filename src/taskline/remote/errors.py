# src/taskline/remote/errors.py

from __future__ import annotations


class TaskServiceError(RuntimeError):
    """Base error for anything that went wrong talking to the remote task service."""


class RemoteRejectedError(TaskServiceError):
    """The service understood the request and refused it (e.g. an unparseable due string)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportFailureError(TaskServiceError):
    """Network failure, timeout or server-side error. Safe for the user to retry."""
