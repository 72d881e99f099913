# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskline.config import DEFAULT_API_BASE_URL, Settings

ENV_NAMES = (
    "TASKLINE_APP_NAME",
    "TASKLINE_LOG_LEVEL",
    "TASKLINE_LOG_RAW_USER_CONTENT",
    "TASKLINE_API_TOKEN",
    "TODOIST_API_TOKEN",
    "TASKLINE_API_BASE_URL",
    "TASKLINE_CONNECT_TIMEOUT_SECONDS",
    "TASKLINE_READ_TIMEOUT_SECONDS",
    "TASKLINE_OFFLINE_MODE",
    "TASKLINE_DATA_DIR",
    "TASKLINE_TASKS_DB_PATH",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_without_token_are_offline(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()

    assert s.app_name == "taskline"
    assert s.api_token is None
    assert s.offline_mode is True
    assert s.api_base_url == DEFAULT_API_BASE_URL
    assert s.tasks_db_path == Path(".local/taskline") / "tasks.sqlite3"
    assert s.log_raw_user_content is False


def test_token_enables_online_mode(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TODOIST_API_TOKEN", "tok")
    clean_env.setenv("TASKLINE_API_BASE_URL", "https://example.test/api/")
    clean_env.setenv("TASKLINE_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.api_token == "tok"
    assert s.offline_mode is False
    assert s.api_base_url == "https://example.test/api"
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"


def test_explicit_offline_and_bad_numbers(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TASKLINE_API_TOKEN", "tok")
    clean_env.setenv("TASKLINE_OFFLINE_MODE", "yes")
    clean_env.setenv("TASKLINE_READ_TIMEOUT_SECONDS", "soon")
    clean_env.setenv("TASKLINE_CONNECT_TIMEOUT_SECONDS", "0")

    s = Settings.from_env()

    assert s.offline_mode is True
    assert s.read_timeout_seconds == 15.0
    assert s.connect_timeout_seconds == 0.5


def test_default_base_url_is_unified_api(clean_env: pytest.MonkeyPatch) -> None:
    # The unified API is the one whose task JSON carries `deadline`.
    assert Settings.from_env().api_base_url == "https://api.todoist.com/api/v1"
