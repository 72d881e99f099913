# src/taskline/sync/pull.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo, TaskService

logger = logging.getLogger(__name__)


async def pull_remote_tasks(store: TaskRepo, service: TaskService) -> int:
    """Mirror the remote task list into the local store. Returns the number of tasks seen."""
    remote_tasks = await service.list_tasks()
    for remote in remote_tasks:
        store.upsert_remote_task(remote)
    logger.info("Pulled %d tasks from the task service", len(remote_tasks))
    return len(remote_tasks)
