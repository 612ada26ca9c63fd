# tests/conftest.py

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from daily_dose.config import Settings
from daily_dose.tasks.task_store import TaskStore


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """The CLI reconfigures the root logger; put it back after every test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.fixture()
def id_factory() -> Callable[[], str]:
    """Deterministic, lexicographically increasing ids."""
    counter = itertools.count(1)
    return lambda: f"T{next(counter):05d}"


@pytest.fixture()
def store(tmp_path: Path, id_factory: Callable[[], str]) -> Iterator[TaskStore]:
    with TaskStore(tmp_path / "storage.db", id_factory=id_factory) as s:
        yield s


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test data directory; no log file."""
    data_dir = tmp_path / "data"
    return Settings(
        app_name="Daily Dose",
        log_level="WARNING",
        log_file_enabled=False,
        data_dir=data_dir,
        db_path=data_dir / "storage.db",
    )
