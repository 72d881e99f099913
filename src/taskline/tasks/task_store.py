# src/taskline/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from pathlib import Path

from .task_models import RemoteTask, ResolvedDueFields, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store (local mirror of the remote service).

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection, so the console thread and the
      background reconciliation loop can both use one store instance
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        # WAL is an optimization; some filesystems refuse it.
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    remote_id TEXT NOT NULL UNIQUE,
                    content TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL,
                    due_date TEXT,
                    due_datetime TEXT,
                    is_recurring INTEGER NOT NULL DEFAULT 0,
                    deadline TEXT
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("due_datetime", "TEXT")
            add_col("is_recurring", "INTEGER NOT NULL DEFAULT 0")
            add_col("deadline", "TEXT")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_due ON tasks(due_date)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            remote_id=str(row["remote_id"]),
            content=str(row["content"] or ""),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
            due_date=row["due_date"],
            due_datetime=row["due_datetime"],
            is_recurring=bool(row["is_recurring"]),
            deadline=row["deadline"],
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(
        self,
        *,
        remote_id: str,
        content: str,
        due: ResolvedDueFields | None = None,
        task_id: str | None = None,
    ) -> str:
        if not remote_id or not remote_id.strip():
            raise ValueError("remote_id is required")
        if not content or not content.strip():
            raise ValueError("content is required")

        due = due or ResolvedDueFields()
        task_id = task_id or str(uuid.uuid4())
        now = time.time()

        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO tasks(
                    id, remote_id, content, created_at, updated_at,
                    due_date, due_datetime, is_recurring, deadline
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task_id,
                    remote_id.strip(),
                    content.strip(),
                    now,
                    now,
                    due.due_date,
                    due.due_datetime,
                    int(due.is_recurring),
                    due.deadline,
                ),
            )
            conn.commit()
            logger.debug("Task added id=%s remote_id=%s", task_id, remote_id)
            return task_id
        finally:
            conn.close()

    def get_task(self, task_id: str) -> Task | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def get_remote_id(self, task_id: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT remote_id FROM tasks WHERE id = ?", (task_id,)).fetchone()
            return str(row["remote_id"]) if row else None
        finally:
            conn.close()

    def list_tasks(self, limit: int = 200) -> list[Task]:
        """All local tasks, dated ones first (earliest due first), then by creation."""
        conn = self._get_conn()
        try:
            rows = conn.execute(
                """
                SELECT *
                FROM tasks
                ORDER BY due_date IS NULL, due_date ASC, created_at ASC
                    LIMIT ?
                """,
                (int(limit),),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]
        finally:
            conn.close()

    def find_by_id_prefix(self, prefix: str) -> list[Task]:
        if not prefix:
            return []
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE id LIKE ? ORDER BY created_at ASC",
                (prefix.replace("%", "").replace("_", "") + "%",),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]
        finally:
            conn.close()

    def apply_due_fields(self, task_id: str, fields: ResolvedDueFields) -> bool:
        """
        Overwrite due_date, due_datetime, is_recurring and deadline in one statement.

        None values are written as NULL (clear). Returns False when no row matched,
        i.e. the task was deleted meanwhile; nothing is inserted in that case.
        """
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                UPDATE tasks
                SET due_date = ?,
                    due_datetime = ?,
                    is_recurring = ?,
                    deadline = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    fields.due_date,
                    fields.due_datetime,
                    int(fields.is_recurring),
                    fields.deadline,
                    time.time(),
                    task_id,
                ),
            )
            conn.commit()
            return cur.rowcount == 1
        finally:
            conn.close()

    def upsert_remote_task(self, remote: RemoteTask) -> str:
        """Insert a task seen on the remote service, or refresh content + due fields of a known one."""
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT id FROM tasks WHERE remote_id = ?", (remote.remote_id,)
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return self.add_task(remote_id=remote.remote_id, content=remote.content, due=remote.due)

        task_id = str(row["id"])
        conn = self._get_conn()
        try:
            conn.execute(
                """
                UPDATE tasks
                SET content = ?,
                    due_date = ?,
                    due_datetime = ?,
                    is_recurring = ?,
                    deadline = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    remote.content,
                    remote.due.due_date,
                    remote.due.due_datetime,
                    int(remote.due.is_recurring),
                    remote.due.deadline,
                    time.time(),
                    task_id,
                ),
            )
            conn.commit()
            return task_id
        finally:
            conn.close()

    def delete_task(self, task_id: str) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            conn.commit()
            return cur.rowcount == 1
        finally:
            conn.close()
