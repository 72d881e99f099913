# src/taskline/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (without a token the offline service is used).
- Local safe overrides may live in an uncommitted config_local.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKLINE"

DEFAULT_API_BASE_URL = "https://api.todoist.com/api/v1"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_raw_user_content: bool

    # ---- Remote task service ----
    api_token: Optional[str]
    api_base_url: str
    connect_timeout_seconds: float
    read_timeout_seconds: float
    offline_mode: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskline").strip() or "taskline"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_raw_user_content = _env_bool(_k("LOG_RAW_USER_CONTENT"), False)

        api_token = _first_env(_k("API_TOKEN"), "TODOIST_API_TOKEN", default=None)
        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).rstrip("/")

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 15.0)

        # No token means there is nothing to talk to.
        offline_mode = _env_bool(_k("OFFLINE_MODE"), False) or not (api_token or "").strip()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskline"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_raw_user_content=log_raw_user_content,
            api_token=api_token,
            api_base_url=api_base_url,
            connect_timeout_seconds=max(0.5, connect_timeout),
            read_timeout_seconds=max(0.5, read_timeout),
            offline_mode=offline_mode,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env for secrets; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    if hasattr(_config_local, "OFFLINE_MODE"):
        object.__setattr__(SETTINGS, "offline_mode", bool(_config_local.OFFLINE_MODE))
    if hasattr(_config_local, "DATA_DIR"):
        object.__setattr__(SETTINGS, "data_dir", Path(_config_local.DATA_DIR))
        object.__setattr__(SETTINGS, "tasks_db_path", Path(_config_local.DATA_DIR) / "tasks.sqlite3")


def get_settings() -> Settings:
    return SETTINGS
