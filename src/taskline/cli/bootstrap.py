# src/taskline/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the task store, the task service, the reconciler and the task manager into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskService
from ..core.state import AppState
from ..remote.offline import OfflineTaskService
from ..remote.todoist import TodoistTaskService
from ..sync.reconciler import DueReconciler
from ..tasks.task_manager import TaskManager
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_task_service(settings) -> TaskService:
    if getattr(settings, "offline_mode", False):
        logger.info("Task service: offline demo mode.")
        return OfflineTaskService()
    try:
        return TodoistTaskService.from_settings(settings)
    except RuntimeError as e:
        # Fallback for demos / local runs without credentials.
        logger.warning("Task service not configured (%s); using offline demo service.", e)
        return OfflineTaskService()


def create_initial_state(*, settings=None, task_service: TaskService | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the service) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    task_store = TaskStore(settings.tasks_db_path)
    if task_service is None:
        task_service = create_task_service(settings)

    reconciler = DueReconciler(
        task_store,
        task_service,
        log_raw_user_content=bool(getattr(settings, "log_raw_user_content", False)),
    )

    return AppState(
        settings=settings,
        task_store=task_store,
        task_service=task_service,
        reconciler=reconciler,
        task_manager=TaskManager(reconciler),
    )
