# src/daily_dose/tasks/task_api.py

from __future__ import annotations

import datetime as dt
import logging

from ..errors import TaskNotFoundError
from .task_models import Task, TaskStatus
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def mark(store: TaskStore, task_id: str) -> None:
    """Move a task to DONE. Marking a DONE task again is a no-op success."""
    store.update_status(task_id, TaskStatus.DONE)


def unmark(store: TaskStore, task_id: str) -> None:
    """Move a task back to TODO from any state."""
    store.update_status(task_id, TaskStatus.TODO)


def task_at_index(store: TaskStore, index: int, *, day: dt.date | None = None) -> Task:
    """
    Return the Nth (1-based) task of `day` (today when omitted), in id order.

    Positions outside 1..count raise TaskNotFoundError; nothing is clamped.
    """
    if day is None:
        day = dt.date.today()
    tasks = store.fetch_exact(day)
    if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= len(tasks):
        raise TaskNotFoundError(
            f"no task at index {index} for {day.isoformat()} ({len(tasks)} task(s) that day)"
        )
    return tasks[index - 1]


def _set_status_by_index(
    store: TaskStore, index: int, status: TaskStatus, day: dt.date | None
) -> Task:
    task = task_at_index(store, index, day=day)
    store.update_status(task.id, status)
    logger.info("Task %s at index %d -> %s", task.id, index, status.value)
    updated = store.get(task.id)
    if updated is None:
        raise TaskNotFoundError(f"task {task.id} disappeared during update")
    return updated


def mark_by_index(store: TaskStore, index: int, *, day: dt.date | None = None) -> Task:
    return _set_status_by_index(store, index, TaskStatus.DONE, day)


def unmark_by_index(store: TaskStore, index: int, *, day: dt.date | None = None) -> Task:
    return _set_status_by_index(store, index, TaskStatus.TODO, day)
