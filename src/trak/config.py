"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Trak"
    DB_FILENAME = "trak.db"
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("TRAK_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("TRAK_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("TRAK_DATABASE_URL", self._build_sqlite_url())
        self.ACTIVITY_WINDOW_DAYS = _env_int("TRAK_ACTIVITY_WINDOW_DAYS", 364)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("TRAK_SECRET_KEY must be set in non-dev mode.")
        if self.ACTIVITY_WINDOW_DAYS < 0:
            raise ValueError("TRAK_ACTIVITY_WINDOW_DAYS must not be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("TRAK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration for the test suite; callers usually override DATABASE_URL."""

    TESTING = True
    __test__ = False

    def __init__(self, database_url: str | None = None) -> None:
        super().__init__()
        if database_url is not None:
            self.DATABASE_URL = database_url
