# src/taskline/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the background task loop, then runs
the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..remote.errors import TaskServiceError
from ..remote.todoist import TodoistTaskService
from ..sync.pull import pull_remote_tasks

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown: pending updates finish, the HTTP client is closed."""
    try:
        state.task_manager.wait_idle(timeout=10.0)
        service = state.task_service
        if isinstance(service, TodoistTaskService):
            state.task_manager.call(service.aclose(), timeout=5.0)
    except Exception:
        logger.exception("Failed to finish background work cleanly.")
    finally:
        state.task_manager.stop()
        state.task_store.close()


def main() -> None:
    settings = get_settings()

    # Console stays quiet by default; everything goes to the log file.
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, file_level=file_level)
    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    state = create_initial_state(settings=settings)
    state.task_manager.start()

    if state.task_store.count_tasks() == 0:
        try:
            state.task_manager.call(pull_remote_tasks(state.task_store, state.task_service))
        except TaskServiceError as e:
            logger.warning("Initial pull failed: %s", e)

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
