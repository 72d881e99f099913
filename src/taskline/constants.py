# src/taskline/constants.py

"""User-facing message strings shared by the dialogs, the task manager and the CLI."""

from __future__ import annotations

from typing import Final

# Success notices
SUCCESS_TASK_DUE_STRING_SET: Final = "Due date set"
SUCCESS_TASK_DUE_TODAY: Final = "Task due today"
SUCCESS_TASK_DUE_TOMORROW: Final = "Task due tomorrow"
SUCCESS_TASK_DUE_MONDAY: Final = "Task due next Monday"
SUCCESS_TASK_DUE_SATURDAY: Final = "Task due Saturday"
SUCCESS_TASKS_PULLED: Final = "Tasks pulled"

# Error notices (also the safe prefixes kept by the error sanitizer)
ERROR_TASK_DUE_DATE_FAILED: Final = "Failed to set due date"
ERROR_TASK_NOT_FOUND: Final = "Task no longer exists locally"
ERROR_TASK_UPDATE_IN_PROGRESS: Final = "An update for this task is already in progress"
ERROR_TASK_PULL_FAILED: Final = "Failed to pull tasks"
ERROR_SERVICE_UNAVAILABLE: Final = "Task service unavailable. Reopen the dialog and try again"
ERROR_INVALID_DATE_FORMAT: Final = "Invalid date format"
ERROR_OPERATION_FAILED: Final = "Operation failed"

# Dialog text
UI_DUE_DATE_DIALOG_TITLE: Final = "Set Due Date"
UI_DUE_DATE_DIALOG_HINT: Final = "Enter: set date | empty: clear date | /cancel: cancel"
UI_NO_TASK_SELECTED_DUE_DATE: Final = "No task selected. Use /tasks to list tasks."
