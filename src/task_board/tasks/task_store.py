# src/task_board/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from pathlib import Path
from typing import Any

from .task_models import Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in TaskStatus)
_PRIORITY_VALUES = ", ".join(f"'{p.value}'" for p in TaskPriority)


class TaskStore:
    """
    SQLite task store.

    Status and priority are guarded by CHECK constraints, so a value outside
    the enums is rejected with sqlite3.IntegrityError and never persisted.
    The same goes for a title that is empty after trimming.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL CHECK (length(trim(title)) > 0),
                    status TEXT NOT NULL DEFAULT 'TODO' CHECK (status IN ({_STATUS_VALUES})),
                    priority TEXT NOT NULL DEFAULT 'LOW' CHECK (priority IN ({_PRIORITY_VALUES})),
                    created_at REAL NOT NULL
                )
                """
            )
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status, created_at)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            title=str(row["title"]),
            status=TaskStatus(row["status"]),
            priority=TaskPriority(row["priority"]),
            created_at=float(row["created_at"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(self, *, title: str, priority: Any = TaskPriority.LOW) -> Task:
        """
        Insert a new TODO task and return it.

        `priority` is written as given; an unknown value raises IntegrityError.
        """
        task_id = uuid.uuid4().hex
        now = time.time()

        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO tasks(id, title, status, priority, created_at) VALUES (?, ?, ?, ?, ?)",
                (task_id, title, TaskStatus.TODO.value, str(priority), now),
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug("Task added id=%s priority=%s", task_id, priority)
        return Task(
            id=task_id,
            title=title,
            status=TaskStatus.TODO,
            priority=TaskPriority(str(priority)),
            created_at=now,
        )

    def get_task(self, task_id: str) -> Task | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_tasks(self, *, status: TaskStatus | None = None) -> list[Task]:
        """All tasks (or only those with `status`), newest first."""
        conn = self._get_conn()
        try:
            if status is None:
                rows = conn.execute(
                    "SELECT * FROM tasks ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM tasks WHERE status = ? ORDER BY created_at DESC, rowid DESC",
                    (status.value,),
                ).fetchall()
            return [self._row_to_task(r) for r in rows]
        finally:
            conn.close()

    def update_task_fields(self, task_id: str, fields: dict[str, Any]) -> Task | None:
        """
        Set the given columns on one task and return the fresh row.

        Only title/status/priority can be written. Returns None if the row
        vanished in the meantime.
        """
        allowed = ("title", "status", "priority")
        sets: list[str] = []
        params: list[Any] = []
        for name in allowed:
            if name in fields:
                sets.append(f"{name} = ?")
                params.append(fields[name])

        conn = self._get_conn()
        try:
            if sets:
                params.append(task_id)
                conn.execute(f"UPDATE tasks SET {', '.join(sets)} WHERE id = ?", params)
                conn.commit()
                logger.debug("Task updated id=%s fields=%s", task_id, sorted(fields))
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def delete_task(self, task_id: str) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            conn.commit()
            deleted = cur.rowcount == 1
        finally:
            conn.close()
        logger.debug("Task deleted id=%s ok=%s", task_id, deleted)
        return deleted

    def count_by_status(self) -> dict[str, int]:
        """Grouped count: {status: n} for every status that has at least one task."""
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT status, COUNT(id) AS n FROM tasks GROUP BY status"
            ).fetchall()
            return {str(r["status"]): int(r["n"]) for r in rows}
        finally:
            conn.close()
