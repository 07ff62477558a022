"""Pytest configuration and shared fixtures for StreakChain tests.

Every test pins its own "now" so results never depend on the machine clock
or its timezone.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from streakchain.models.habit import Habit


@pytest.fixture
def now() -> datetime:
    """Midday on the reference Thursday, as naive local wall time."""

    return datetime(2024, 3, 14, 12, 0)


@pytest.fixture
def daily_run():
    """Factory for consecutive daily identifiers ending on ``end``.

    Returns:
        Callable: ``daily_run(end, length)`` -> set of identifiers
    """

    def _daily_run(end: date, length: int) -> set[str]:
        return {(end - timedelta(days=offset)).isoformat() for offset in range(length)}

    return _daily_run


@pytest.fixture
def weekly_run():
    """Factory for consecutive Monday identifiers ending on the Monday ``end``."""

    def _weekly_run(end: date, length: int) -> set[str]:
        assert end.weekday() == 0, "weekly runs must end on a Monday"
        return {(end - timedelta(weeks=offset)).isoformat() for offset in range(length)}

    return _weekly_run


@pytest.fixture
def habit_factory():
    """Factory for habits shaped like store rows.

    Returns:
        Callable: Function that builds Habit instances via ``from_record``
    """

    def _create_habit(
        name: str = "Read",
        cadence: str = "daily",
        completed_dates: list[str] | None = None,
        habit_id: str = "habit-1",
    ) -> Habit:
        return Habit.from_record(
            {
                "id": habit_id,
                "name": name,
                "cadence": cadence,
                "completed_dates": completed_dates or [],
                "created_at": "2024-03-01T08:00:00+00:00",
                "updated_at": "2024-03-14T08:00:00+00:00",
            }
        )

    return _create_habit


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    """Point the CLI config at a temp data dir with quiet console logging."""

    monkeypatch.setenv("STREAKCHAIN_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("STREAKCHAIN_DEV_MODE", "false")
    monkeypatch.delenv("STREAKCHAIN_TIMEZONE", raising=False)
    monkeypatch.delenv("STREAKCHAIN_WINDOW_LENGTH", raising=False)
    return tmp_path
