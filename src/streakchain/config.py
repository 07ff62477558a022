"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

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

    APP_NAME = "StreakChain"
    LOG_FILENAME = "streakchain.log"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("STREAKCHAIN_DEV_MODE", default=True)
        self.TIMEZONE = os.getenv("STREAKCHAIN_TIMEZONE") or None
        self.WINDOW_LENGTH = _env_int("STREAKCHAIN_WINDOW_LENGTH", 7)
        if self.WINDOW_LENGTH < 0:
            raise ValueError("STREAKCHAIN_WINDOW_LENGTH cannot be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("STREAKCHAIN_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def timezone(self) -> Optional[tzinfo]:
        """Return the configured zone, or None for the system local zone."""

        if not self.TIMEZONE:
            return None
        try:
            return ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown STREAKCHAIN_TIMEZONE: {self.TIMEZONE!r}") from exc

    def now(self) -> datetime:
        """Return the current instant as an aware datetime in the configured zone."""

        zone = self.timezone()
        if zone is None:
            return datetime.now().astimezone()
        return datetime.now(zone)


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration for tests with an explicit data directory."""

    __test__ = False  # keep pytest from collecting this class

    DEBUG = True
    TESTING = True

    def __init__(self, data_dir: Path | str) -> None:
        self._data_dir = Path(data_dir)
        super().__init__()
        self.DEV_MODE = True

    def _resolve_data_dir(self) -> Path:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        return self._data_dir
