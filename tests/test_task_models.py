# tests/test_task_models.py

from __future__ import annotations

import datetime as dt

import pytest

from daily_dose.errors import DataCorruptionError
from daily_dose.tasks.codec import date_from_db, date_to_db, status_from_db, status_to_db
from daily_dose.tasks.task_models import TaskStatus


def test_status_tokens_are_lowercase_with_underscores() -> None:
    assert [s.value for s in TaskStatus] == ["todo", "in_progress", "done", "blocked"]


@pytest.mark.parametrize("status", list(TaskStatus))
def test_status_codec_roundtrip(status: TaskStatus) -> None:
    assert status_from_db(status_to_db(status)) is status


@pytest.mark.parametrize("raw", ["DONE", "Done", " todo ", "In_Progress"])
def test_status_parse_is_case_insensitive(raw: str) -> None:
    assert TaskStatus.parse(raw).value == raw.strip().lower()


@pytest.mark.parametrize("raw", ["", "finished", "in progress", "completed"])
def test_unknown_status_token(raw: str) -> None:
    with pytest.raises(ValueError):
        TaskStatus.parse(raw)
    with pytest.raises(DataCorruptionError):
        status_from_db(raw)


def test_status_from_db_rejects_non_text() -> None:
    with pytest.raises(DataCorruptionError):
        status_from_db(None)


def test_status_label() -> None:
    assert TaskStatus.IN_PROGRESS.label == "In progress"
    assert TaskStatus.DONE.label == "Done"


def test_date_codec() -> None:
    assert date_to_db(dt.date(2024, 3, 1)) == "2024-03-01"
    assert date_to_db(dt.datetime(2024, 3, 1, 12, 30)) == "2024-03-01"
    assert date_from_db("2024-03-01") == dt.date(2024, 3, 1)


@pytest.mark.parametrize("raw", ["2024-02-30", "20240301", "2024-3-1", "yesterday", 20240301])
def test_malformed_stored_date(raw: object) -> None:
    with pytest.raises(DataCorruptionError):
        date_from_db(raw)
