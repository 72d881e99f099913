# src/taskline/tasks/task_manager.py

"""
Background execution of task operations.

The console loop is blocking (input()), while the task service client is async.
TaskManager runs its own asyncio loop in a daemon thread; the console submits
actions and returns immediately, and later drains ShowNotice results.

At most one operation per task is in flight: a second submit for the same task
is refused with a notice instead of racing the first one.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import queue
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

from ..constants import ERROR_OPERATION_FAILED, ERROR_TASK_UPDATE_IN_PROGRESS
from ..core.actions import Action, SetTaskDueDate, SetTaskDueString, ShowNotice
from ..sync.reconciler import DueReconciler, Outcome, OutcomeStatus
from ..ui.error_sanitizer import sanitize_user_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


def outcome_to_notice(outcome: Outcome) -> ShowNotice:
    # NOT_FOUND is a notice, not an error: nothing the user did was wrong.
    return ShowNotice(message=outcome.message, is_error=outcome.status == OutcomeStatus.FAILED)


class TaskManager:
    def __init__(self, reconciler: DueReconciler) -> None:
        self._reconciler = reconciler
        self._results: queue.Queue[Action] = queue.Queue()
        self._in_flight: set[str] = set()
        self._pending: set[concurrent.futures.Future[Any]] = set()
        self._lock = threading.Lock()

        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    # ---- lifecycle ----

    def start(self) -> None:
        if self._thread is not None:
            return

        ready = threading.Event()

        def runner() -> None:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            self._loop = loop
            ready.set()
            try:
                loop.run_forever()
            finally:
                with contextlib.suppress(RuntimeError):
                    loop.run_until_complete(loop.shutdown_asyncgens())
                loop.close()

        self._thread = threading.Thread(target=runner, name="taskline-tasks", daemon=True)
        self._thread.start()
        if not ready.wait(timeout=5.0):
            raise RuntimeError("Task manager loop did not start")
        logger.info("Task manager background loop started.")

    def stop(self, timeout: float = 5.0) -> None:
        loop, thread = self._loop, self._thread
        if loop is None or thread is None:
            return
        self.wait_idle(timeout=timeout)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=timeout)
        self._loop = None
        self._thread = None
        logger.info("Task manager background loop stopped.")

    # ---- operations ----

    def submit(self, action: Action) -> bool:
        """
        Schedule a due update in the background. Returns False if refused
        (another update for the same task is still running).
        """
        if self._loop is None:
            raise RuntimeError("TaskManager.start() must be called before submit()")

        match action:
            case SetTaskDueString(task_id=task_id) | SetTaskDueDate(task_id=task_id):
                pass
            case _:
                raise TypeError(f"Unsupported background action: {action!r}")

        with self._lock:
            if task_id in self._in_flight:
                logger.info("Background: refusing overlapping update for task %s", task_id)
                self._results.put(ShowNotice(f"{ERROR_TASK_UPDATE_IN_PROGRESS}: {task_id}"))
                return False
            self._in_flight.add(task_id)

        future = asyncio.run_coroutine_threadsafe(self._run(action, task_id), self._loop)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return True

    def call(self, coro: Coroutine[Any, Any, T], timeout: float | None = 30.0) -> T:
        """Run a coroutine on the background loop and wait for its result (blocking)."""
        if self._loop is None:
            coro.close()
            raise RuntimeError("TaskManager.start() must be called before call()")
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result(timeout=timeout)

    async def execute(self, action: SetTaskDueString | SetTaskDueDate) -> ShowNotice:
        """Run one operation to completion and convert its outcome into a notice."""
        try:
            match action:
                case SetTaskDueString(task_id=task_id, due_string=due_string):
                    outcome = await self._reconciler.set_task_due_string(task_id, due_string)
                case SetTaskDueDate(task_id=task_id, due_date=due_date, success_message=msg):
                    outcome = await self._reconciler.set_task_due_date(task_id, due_date, msg)
                case _:
                    raise TypeError(f"Unsupported background action: {action!r}")
        except Exception as e:
            logger.exception("Background operation crashed: %s", type(action).__name__)
            return ShowNotice(sanitize_user_error(str(e), ERROR_OPERATION_FAILED), is_error=True)
        return outcome_to_notice(outcome)

    async def _run(self, action: SetTaskDueString | SetTaskDueDate, task_id: str) -> None:
        try:
            notice = await self.execute(action)
            self._results.put(notice)
        finally:
            with self._lock:
                self._in_flight.discard(task_id)

    def _forget(self, future: concurrent.futures.Future[Any]) -> None:
        with self._lock:
            self._pending.discard(future)

    # ---- results ----

    def is_in_flight(self, task_id: str) -> bool:
        with self._lock:
            return task_id in self._in_flight

    def wait_idle(self, timeout: float | None = None) -> bool:
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        _done, not_done = concurrent.futures.wait(pending, timeout=timeout)
        return not not_done

    def drain(self) -> list[Action]:
        out: list[Action] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except queue.Empty:
                return out
