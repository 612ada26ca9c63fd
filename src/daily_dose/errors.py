# src/daily_dose/errors.py

"""
Failure kinds raised by the task core.

Every error carries a stable `kind` so the CLI can report what went wrong
without matching on message text.
"""

from __future__ import annotations


class DailyDoseError(Exception):
    kind = "error"


class InvalidDateError(DailyDoseError):
    """Date resolution produced (or was asked for) a non-existent calendar date."""

    kind = "invalid_date"


class DescriptionEmptyError(DailyDoseError):
    kind = "description_empty"


class TaskNotFoundError(DailyDoseError):
    """No task with the given id, or an index past the day's task count."""

    kind = "not_found"


class StorageUnavailableError(DailyDoseError):
    """The SQLite store could not be opened, read or written."""

    kind = "storage_unavailable"


class DataCorruptionError(DailyDoseError):
    """A persisted value could not be decoded back into a domain value."""

    kind = "data_corruption"
