# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit your API token. Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)
"""

ENV_VARS = {
    # App / logging
    "TASKLINE_APP_NAME": "App display name (default: taskline).",
    "TASKLINE_LOG_LEVEL": "File log level (default: INFO).",
    "TASKLINE_LOG_RAW_USER_CONTENT": "Also log typed due strings verbatim at DEBUG (true/false).",
    # Task service
    "TASKLINE_API_TOKEN": "Todoist API token (TODOIST_API_TOKEN is accepted too).",
    "TASKLINE_API_BASE_URL": "Task service base URL (default: https://api.todoist.com/api/v1; REST v2 URLs also work).",
    "TASKLINE_CONNECT_TIMEOUT_SECONDS": "Connect timeout (default: 5).",
    "TASKLINE_READ_TIMEOUT_SECONDS": "Read timeout (default: 15).",
    "TASKLINE_OFFLINE_MODE": "Use the in-memory demo service (forced on when no token is set).",
    # Paths (gitignored)
    "TASKLINE_DATA_DIR": "Local data directory, also holds taskline.log (default: .local/taskline).",
    "TASKLINE_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
}
