# src/daily_dose/tasks/task_store.py

from __future__ import annotations

import contextlib
import datetime as dt
import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..errors import (
    DataCorruptionError,
    DescriptionEmptyError,
    StorageUnavailableError,
    TaskNotFoundError,
)
from .codec import date_from_db, date_to_db, status_from_db, status_to_db
from .ids import MonotonicUlidFactory
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


def _casefold(value: object) -> str | None:
    return value.casefold() if isinstance(value, str) else None


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TaskStore:
    """
    SQLite task store.

    One connection is held for the lifetime of the store; use it as a context
    manager (or call close()) so the handle is released on every exit path.

    Rows come back ordered by id. Ids are ULIDs, so that is creation order.
    A row whose status or date cannot be decoded fails the whole fetch with
    DataCorruptionError; rows are never skipped or defaulted.
    """

    def __init__(
        self,
        db_path: str | Path = "storage.db",
        *,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._db_path = Path(db_path)
        self._new_id = id_factory or MonotonicUlidFactory()
        self._conn: sqlite3.Connection | None = None

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except (OSError, sqlite3.Error) as exc:
            raise StorageUnavailableError(
                f"cannot open task store at {self._db_path}: {exc}"
            ) from exc

        conn.row_factory = sqlite3.Row
        # LIKE only folds ASCII; search compares casefolded text on both sides.
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        self._conn = conn
        try:
            self._ensure_schema()
        except StorageUnavailableError:
            self.close()
            raise
        logger.info("TaskStore ready db=%s", self._db_path)

    def __enter__(self) -> TaskStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            conn.close()
        except sqlite3.Error:
            logger.warning("Failed to close task store db=%s", self._db_path, exc_info=True)
        else:
            logger.debug("TaskStore closed db=%s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageUnavailableError(f"task store at {self._db_path} is closed")
        return self._conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    description TEXT NOT NULL,
                    status TEXT NOT NULL,
                    date TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_tasks_date ON tasks(date)")
            conn.commit()
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise StorageUnavailableError(
                f"cannot initialize task store at {self._db_path}: {exc}"
            ) from exc

    def _write(self, op: str, sql: str, params: tuple[Any, ...]) -> int:
        """Run one statement as its own transaction and return the affected-row count."""
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise StorageUnavailableError(f"{op} failed: {exc}") from exc
        return cur.rowcount

    def _read(self, sql: str, params: tuple[Any, ...]) -> list[sqlite3.Row]:
        conn = self._get_conn()
        try:
            return conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"reading tasks failed: {exc}") from exc

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        task_id = row["id"]
        try:
            return Task(
                id=str(task_id),
                description=str(row["description"]),
                status=status_from_db(row["status"]),
                date=date_from_db(row["date"]),
            )
        except DataCorruptionError as exc:
            logger.error("Corrupt task row id=%s: %s", task_id, exc)
            raise DataCorruptionError(f"task {task_id}: {exc}") from exc

    @staticmethod
    def _clean_description(description: str) -> str:
        text = (description or "").strip()
        if not text:
            raise DescriptionEmptyError("task description must not be empty")
        return text

    # ---- public API ----

    def count(self) -> int:
        (n,) = self._read("SELECT COUNT(*) FROM tasks", ())[0]
        return int(n)

    def insert(
        self,
        description: str,
        status: TaskStatus = TaskStatus.TODO,
        task_date: dt.date | None = None,
    ) -> str:
        text = self._clean_description(description)
        if task_date is None:
            task_date = dt.date.today()

        task_id = self._new_id()
        self._write(
            "insert",
            "INSERT INTO tasks (id, description, status, date) VALUES (?, ?, ?, ?)",
            (task_id, text, status_to_db(status), date_to_db(task_date)),
        )
        logger.debug(
            "Task added id=%s status=%s date=%s", task_id, status.value, date_to_db(task_date)
        )
        return task_id

    def get(self, task_id: str) -> Task | None:
        rows = self._read(
            "SELECT id, description, status, date FROM tasks WHERE id = ?", (task_id,)
        )
        return self._row_to_task(rows[0]) if rows else None

    def fetch_exact(self, day: dt.date, *, search: str | None = None) -> list[Task]:
        return self.fetch_range(day, None, search=search)

    def fetch_range(
        self,
        start: dt.date,
        end: dt.date | None = None,
        *,
        search: str | None = None,
    ) -> list[Task]:
        """
        Tasks dated within [start, end] inclusive, ordered by id.

        Without `end` only tasks dated exactly `start` are returned.
        `search` narrows to descriptions containing the text (case-insensitive).
        """
        if end is None:
            where = "date = ?"
            params: list[Any] = [date_to_db(start)]
        else:
            where = "date BETWEEN ? AND ?"
            params = [date_to_db(start), date_to_db(end)]

        if search:
            where += " AND casefold(description) LIKE ? ESCAPE '\\'"
            params.append(f"%{_escape_like(search.casefold())}%")

        rows = self._read(
            f"SELECT id, description, status, date FROM tasks WHERE {where} ORDER BY id ASC",
            tuple(params),
        )
        return [self._row_to_task(r) for r in rows]

    def update_description(self, task_id: str, description: str) -> None:
        text = self._clean_description(description)
        changed = self._write(
            "update description",
            "UPDATE tasks SET description = ? WHERE id = ?",
            (text, task_id),
        )
        if changed == 0:
            raise TaskNotFoundError(f"no task with id {task_id}")
        logger.debug("Task description updated id=%s", task_id)

    def update_status(self, task_id: str, status: TaskStatus) -> None:
        changed = self._write(
            "update status",
            "UPDATE tasks SET status = ? WHERE id = ?",
            (status_to_db(status), task_id),
        )
        if changed == 0:
            raise TaskNotFoundError(f"no task with id {task_id}")
        logger.debug("Task status updated id=%s status=%s", task_id, status.value)

    def delete(self, task_id: str) -> None:
        changed = self._write("delete", "DELETE FROM tasks WHERE id = ?", (task_id,))
        if changed == 0:
            raise TaskNotFoundError(f"no task with id {task_id}")
        logger.debug("Task deleted id=%s", task_id)
