# src/daily_dose/tasks/date_resolver.py

"""
Turn optional year/month/day overrides into one concrete calendar date.

Fields are applied year -> month -> day. Assume today is April 15th and the
user asks for day 31 of month 3: setting the day first would try April 31st,
which does not exist. Setting the month first gives March 15th, then March 31st.
"""

from __future__ import annotations

import calendar
import datetime as dt
import logging

from ..errors import InvalidDateError

logger = logging.getLogger(__name__)

EPOCH_YEAR = 1978


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDateError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidDateError(f"{name} {value} is outside {low}..{high}")


def _apply(current: dt.date, field: str, value: int) -> dt.date:
    try:
        return current.replace(**{field: value})
    except ValueError as exc:
        raise InvalidDateError(
            f"setting {field}={value} on {current.isoformat()} gives a date that does not exist"
        ) from exc


def resolve_date(
    base: dt.date | None = None,
    *,
    year: int | None = None,
    month: int | None = None,
    day: int | None = None,
) -> dt.date:
    """
    Resolve overrides against `base` (today's local date when omitted).

    Raises InvalidDateError for out-of-range fields or a non-existent date at any
    step; nothing is clamped or rolled over.
    """
    resolved = base if base is not None else dt.date.today()
    if isinstance(resolved, dt.datetime):
        resolved = resolved.date()

    if year is not None:
        _check_range("year", year, EPOCH_YEAR, dt.MAXYEAR)
        resolved = _apply(resolved, "year", year)

    if month is not None:
        _check_range("month", month, 1, 12)
        resolved = _apply(resolved, "month", month)

    if day is not None:
        _check_range("day", day, 1, 31)
        resolved = _apply(resolved, "day", day)

    logger.debug(
        "Resolved date year=%s month=%s day=%s -> %s", year, month, day, resolved.isoformat()
    )
    return resolved


def to_iso(value: dt.date) -> str:
    """Canonical YYYY-MM-DD form used for storage and display."""
    # datetime is a date subclass; never let a time-of-day leak out.
    if isinstance(value, dt.datetime):
        value = value.date()
    return value.isoformat()


def month_range(month: int | None = None, *, today: dt.date | None = None) -> tuple[dt.date, dt.date]:
    """
    Date range listed by `daily-dose list`.

    Starts on the 1st of `month` (current month when omitted) in the current year.
    Ends today for the current month, otherwise on the month's last day.
    """
    if today is None:
        today = dt.date.today()
    if month is None or month == today.month:
        return today.replace(day=1), today

    _check_range("month", month, 1, 12)
    last_day = calendar.monthrange(today.year, month)[1]
    return dt.date(today.year, month, 1), dt.date(today.year, month, last_day)
