"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitGrid"
    DB_FILENAME = "habitgrid.db"
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITGRID_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITGRID_DEV_MODE", default=True)
        self.LOG_JSON = _env_bool("HABITGRID_LOG_JSON", default=True)
        self.TIMEZONE = os.getenv("HABITGRID_TIMEZONE", "").strip() or None
        self.DATABASE_URL = os.getenv("HABITGRID_DATABASE_URL", self._build_sqlite_url())
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITGRID_SECRET_KEY must be set in non-dev mode.")
        if self.TIMEZONE:
            try:
                ZoneInfo(self.TIMEZONE)
            except ZoneInfoNotFoundError as exc:
                raise ValueError(f"Unknown HABITGRID_TIMEZONE: {self.TIMEZONE}") from exc

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITGRID_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}

    def today(self) -> date:
        """Return the current calendar date in the configured timezone."""

        if self.TIMEZONE:
            return datetime.now(ZoneInfo(self.TIMEZONE)).date()
        return date.today()


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; callers usually override DATABASE_URL."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.LOG_JSON = False
