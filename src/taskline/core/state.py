# src/taskline/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..sync.reconciler import DueReconciler
from ..tasks.task_manager import TaskManager
from ..tasks.task_store import TaskStore
from ..ui.dialogs import DialogComponent
from .ports import TaskService


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskStore
    task_service: TaskService
    reconciler: DueReconciler
    task_manager: TaskManager

    dialog: DialogComponent = field(default_factory=DialogComponent)

    # Task ids in the order of the last /tasks listing (for "/due 2").
    last_listing: list[str] = field(default_factory=list)
