# src/daily_dose/tasks/task_models.py

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are the canonical tokens stored in the `status` column.
    Only TODO and DONE are reached through mark/unmark; IN_PROGRESS and BLOCKED
    round-trip through storage but have no dedicated transition.
    """

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """Exact, case-insensitive token match. Unknown tokens raise ValueError."""
        token = raw.strip().lower()
        for status in cls:
            if status.value == token:
                return status
        raise ValueError(f"unknown task status token: {raw!r}")

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    description: str
    status: TaskStatus
    date: dt.date
