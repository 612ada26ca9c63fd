# src/daily_dose/cli/bootstrap.py

"""
CLI bootstrap helpers.

The composition root for one invocation:
- configures logging from settings,
- ensures the local data directory exists,
- opens the TaskStore the command runs against.
"""

from __future__ import annotations

import logging

from ..config import Settings
from ..errors import StorageUnavailableError
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    console_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    log_file = None
    if settings.log_file_enabled:
        try:
            settings.data_dir.mkdir(parents=True, exist_ok=True)
            log_file = settings.log_file
        except OSError:
            # The store open below reports the unusable directory properly.
            log_file = None
    setup_logging(log_file=log_file, console_level=console_level)


def open_store(settings: Settings) -> TaskStore:
    """Open the task store; the caller owns it and must close it."""
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageUnavailableError(
            f"cannot create data directory {settings.data_dir}: {exc}"
        ) from exc
    return TaskStore(settings.db_path)
