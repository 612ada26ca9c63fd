# src/daily_dose/tasks/task_query.py

"""
Grouping of fetched tasks for display.

Groups are ordered latest date first. Inside a group tasks keep the
ascending-id order the store returned them in.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable
from typing import NamedTuple

from .task_models import Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class TaskGroup(NamedTuple):
    date: dt.date
    tasks: list[Task]


def group_by_date(tasks: Iterable[Task]) -> list[TaskGroup]:
    buckets: dict[dt.date, list[Task]] = {}
    for task in tasks:
        buckets.setdefault(task.date, []).append(task)
    return [TaskGroup(day, buckets[day]) for day in sorted(buckets, reverse=True)]


def list_grouped(
    store: TaskStore,
    start: dt.date,
    end: dt.date | None = None,
    *,
    search: str | None = None,
    limit: int | None = None,
) -> list[TaskGroup]:
    """
    Fetch tasks for `start` (or the inclusive range up to `end`) grouped by date.

    `limit` keeps only the N most recent groups. Days without tasks never show up.
    """
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1")

    tasks = store.fetch_range(start, end, search=search)
    groups = group_by_date(tasks)
    if limit is not None:
        groups = groups[:limit]

    logger.debug(
        "Listed start=%s end=%s search=%r -> %d tasks in %d groups",
        start,
        end,
        search,
        len(tasks),
        len(groups),
    )
    return groups
