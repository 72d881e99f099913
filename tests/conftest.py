# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskline.cli.bootstrap import create_initial_state
from taskline.core.state import AppState
from taskline.tasks.task_models import ResolvedDueFields
from taskline.tasks.task_store import TaskStore

from .fakes import FakeTaskService


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        offline_mode=True,
        log_raw_user_content=False,
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "tasks.sqlite3")


@pytest.fixture()
def seeded_task_id(store: TaskStore) -> str:
    """A task with every due field populated, so clears are observable."""
    return store.add_task(
        remote_id="remote-1",
        content="Initial content",
        due=ResolvedDueFields(
            due_date="2026-03-10",
            due_datetime="2026-03-10T09:00:00",
            is_recurring=True,
            deadline="2026-03-05",
        ),
    )


@pytest.fixture()
def fake_service() -> FakeTaskService:
    return FakeTaskService()


@pytest.fixture()
def state(settings: SimpleNamespace, fake_service: FakeTaskService) -> Iterator[AppState]:
    """
    AppState wired with a fake service.

    NOTE: We keep the real SQLite TaskStore here because its atomic update is part
    of what we want to test.
    """
    app_state = create_initial_state(settings=settings, task_service=fake_service)
    app_state.task_manager.start()
    yield app_state
    app_state.task_manager.stop()
