# src/daily_dose/tasks/codec.py

"""
Mapping between domain values and their SQLite column representation.

TaskStore binds and reads statuses and dates only through these functions.
"""

from __future__ import annotations

import datetime as dt

from ..errors import DataCorruptionError
from .date_resolver import to_iso
from .task_models import TaskStatus


def status_to_db(status: TaskStatus) -> str:
    return status.value


def status_from_db(raw: object) -> TaskStatus:
    if not isinstance(raw, str):
        raise DataCorruptionError(f"status column holds non-text value {raw!r}")
    try:
        return TaskStatus.parse(raw)
    except ValueError as exc:
        raise DataCorruptionError(f"unrecognized status token {raw!r}") from exc


def date_to_db(value: dt.date) -> str:
    return to_iso(value)


def date_from_db(raw: object) -> dt.date:
    if not isinstance(raw, str):
        raise DataCorruptionError(f"date column holds non-text value {raw!r}")
    try:
        parsed = dt.date.fromisoformat(raw)
    except ValueError as exc:
        raise DataCorruptionError(f"malformed date {raw!r}") from exc
    if parsed.isoformat() != raw:
        raise DataCorruptionError(f"date {raw!r} is not in YYYY-MM-DD form")
    return parsed
