"""StreakChain: streak counts for daily and weekly habits."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .exceptions import InvalidCadence, InvalidIdentifier, StreakError
from .models.habit import Habit
from .services.streaks import (
    StreakSummary,
    current_streak,
    local_date_identifier,
    rolling_window,
    summarize,
    week_date_range,
    week_identifier,
    week_start,
)

__all__ = [
    "BaseConfig",
    "DevConfig",
    "Habit",
    "InvalidCadence",
    "InvalidIdentifier",
    "StreakError",
    "StreakSummary",
    "current_streak",
    "local_date_identifier",
    "rolling_window",
    "summarize",
    "week_date_range",
    "week_identifier",
    "week_start",
]
