# src/daily_dose/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- Every path can be overridden, which is what the tests rely on.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "DAILY_DOSE"

DEFAULT_DATA_DIR = Path("~/.local/share/daily-dose")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default.expanduser()
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file_enabled: bool

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path

    @property
    def log_file(self) -> Path:
        return self.data_dir / "daily-dose.log"

    @staticmethod
    def from_env() -> Settings:
        # .env next to where the command runs, not next to the installed package.
        load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "Daily Dose").strip() or "Daily Dose"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_file_enabled = _env_bool(_k("LOG_FILE"), True)

        data_dir = _env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR)
        db_path = _env_path(_k("DB_PATH"), data_dir / "storage.db")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file_enabled=log_file_enabled,
            data_dir=data_dir,
            db_path=db_path,
        )


def get_settings() -> Settings:
    return Settings.from_env()
