# src/taskline/ui/error_sanitizer.py

from __future__ import annotations

from ..constants import (
    ERROR_INVALID_DATE_FORMAT,
    ERROR_SERVICE_UNAVAILABLE,
    ERROR_TASK_DUE_DATE_FAILED,
    ERROR_TASK_NOT_FOUND,
    ERROR_TASK_PULL_FAILED,
    ERROR_TASK_UPDATE_IN_PROGRESS,
)

SAFE_ERROR_PREFIXES: tuple[str, ...] = (
    ERROR_TASK_DUE_DATE_FAILED,
    ERROR_TASK_NOT_FOUND,
    ERROR_TASK_UPDATE_IN_PROGRESS,
    ERROR_TASK_PULL_FAILED,
    ERROR_SERVICE_UNAVAILABLE,
    ERROR_INVALID_DATE_FORMAT,
)


def sanitize_user_error(raw_error: str, fallback_message: str) -> str:
    """
    Reduce an internal error string to a message that is safe to show.

    Only a known message prefix survives; everything after it (backend payloads,
    tokens, stack context) is dropped. Unknown errors collapse to fallback_message.
    """
    trimmed = raw_error.strip()

    for safe_prefix in SAFE_ERROR_PREFIXES:
        if safe_prefix in trimmed:
            return safe_prefix

    return fallback_message
