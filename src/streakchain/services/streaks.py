"""Streak engine: local-date identifiers and streak counts for habits.

Every function here is pure. "Now" is always passed in by the caller and the
local calendar day is read from it directly:

* an aware ``datetime`` is read in its own zone, or converted to ``tz`` first
  when one is given;
* a naive ``datetime`` or a ``date`` is already local wall time.

Identifiers are ``YYYY-MM-DD`` strings of a local calendar day. Weekly habits
use the Monday that starts the week as their identifier. Nothing goes through
UTC, since that shifts the day near midnight for users west of UTC.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Iterable, Optional, Union

from ..exceptions import InvalidIdentifier
from ..logging_config import get_logger
from ..models.habit import Habit, normalize_cadence

logger = get_logger("services.streaks")

Moment = Union[date, datetime]

_IDENTIFIER_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
DEFAULT_WINDOW_LENGTH = 7


def _local_day(moment: Moment, tz: Optional[tzinfo] = None) -> date:
    """Return the local calendar day of ``moment``."""

    if isinstance(moment, datetime):
        if tz is not None and moment.tzinfo is not None:
            moment = moment.astimezone(tz)
        return moment.date()
    if isinstance(moment, date):
        return moment
    raise TypeError(f"Expected date or datetime, got {type(moment).__name__}")


def _format(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def _monday(day: date) -> date:
    # weekday() counts Monday as 0, so Sunday lands six days after its Monday.
    return day - timedelta(days=day.weekday())


@dataclass(frozen=True, slots=True)
class _PeriodRule:
    """How one cadence maps a day to its period and steps between periods."""

    anchor: Callable[[date], date]
    step: timedelta
    unit: str

    def previous(self, period: date) -> Optional[date]:
        """Return the period before ``period``, or None when it would precede ``date.min``."""

        if period - date.min < self.step:
            return None
        return self.anchor(period - self.step)


_RULES: dict[str, _PeriodRule] = {
    "daily": _PeriodRule(anchor=lambda day: day, step=timedelta(days=1), unit="day"),
    "weekly": _PeriodRule(anchor=_monday, step=timedelta(days=7), unit="week"),
}


def _rule_for(cadence: str) -> _PeriodRule:
    return _RULES[normalize_cadence(cadence)]


def local_date_identifier(moment: Moment, tz: Optional[tzinfo] = None) -> str:
    """Return the ``YYYY-MM-DD`` identifier of the moment's local day.

    The caller owns the zone. An aware ``moment`` is read in the zone it
    carries, so a UTC instant yields the UTC day unless ``tz`` names the
    user's zone. Pass ``tz`` (or an instant already in the user's zone)
    whenever the clock hands out UTC.
    """

    return _format(_local_day(moment, tz))


def parse_identifier(identifier: str) -> date:
    """Parse a ``YYYY-MM-DD`` identifier into a local calendar ``date``.

    Raises:
        InvalidIdentifier: if the value is not a string of that exact shape
            or names a day that does not exist.
    """

    if not isinstance(identifier, str) or not _IDENTIFIER_RE.fullmatch(identifier):
        raise InvalidIdentifier(identifier)
    year, month, day = (int(part) for part in identifier.split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidIdentifier(identifier, str(exc)) from exc


def week_start(moment: Moment, tz: Optional[tzinfo] = None) -> date:
    """Return the Monday that starts the local Monday-Sunday week of ``moment``."""

    return _monday(_local_day(moment, tz))


def week_identifier(moment: Moment, tz: Optional[tzinfo] = None) -> str:
    """Return the identifier of the Monday starting the moment's week."""

    return _format(week_start(moment, tz))


def week_date_range(identifier: str) -> tuple[date, date]:
    """Return ``(start, end)`` for a week identifier; ``end`` is the Sunday."""

    start = parse_identifier(identifier)
    try:
        return start, start + timedelta(days=6)
    except OverflowError as exc:
        raise InvalidIdentifier(identifier, "week ends after the last representable day") from exc


def format_week_range(identifier: str) -> str:
    """Return a short label such as ``"Mar 11 - Mar 17"`` for a week."""

    start, end = week_date_range(identifier)
    return f"{start:%b} {start.day} - {end:%b} {end.day}"


def period_identifier(cadence: str, moment: Moment, tz: Optional[tzinfo] = None) -> str:
    """Return the identifier of the period containing ``moment``."""

    rule = _rule_for(cadence)
    return _format(rule.anchor(_local_day(moment, tz)))


def _parse_completions(completions: Iterable[str], rule: _PeriodRule) -> set[date]:
    """Parse every identifier up front so a bad entry cannot hide behind a gap."""

    periods: set[date] = set()
    for identifier in completions:
        day = parse_identifier(identifier)
        if rule.anchor(day) != day:
            raise InvalidIdentifier(identifier, f"not the first day of a {rule.unit}")
        periods.add(day)
    return periods


def current_streak(
    completions: Iterable[str],
    cadence: str,
    now: Moment,
    tz: Optional[tzinfo] = None,
) -> int:
    """Return the number of consecutive completed periods ending now.

    The current period is still open, so when it is not yet complete the walk
    starts from the previous period instead. If neither is complete the
    streak is broken and the result is 0.
    """

    rule = _rule_for(cadence)
    periods = _parse_completions(completions, rule)
    if not periods:
        return 0

    current = rule.anchor(_local_day(now, tz))
    previous = rule.previous(current)
    if current in periods:
        cursor = current
    elif previous in periods:
        cursor = previous
    else:
        return 0

    count = 0
    while cursor in periods:
        count += 1
        cursor = rule.previous(cursor)
    return count


def longest_streak(completions: Iterable[str], cadence: str) -> int:
    """Return the longest run of consecutive completed periods."""

    rule = _rule_for(cadence)
    periods = sorted(_parse_completions(completions, rule))

    longest = 0
    run = 0
    last: Optional[date] = None
    for period in periods:
        if last is not None and period - last == rule.step:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last = period
    return longest


def rolling_window(
    cadence: str,
    now: Moment,
    length: int = DEFAULT_WINDOW_LENGTH,
    tz: Optional[tzinfo] = None,
) -> list[str]:
    """Return the ``length`` latest period identifiers, oldest first.

    The window is shorter when the calendar runs out before ``length`` periods.
    """

    if length < 0:
        raise ValueError("Window length cannot be negative")
    rule = _rule_for(cadence)
    window: list[str] = []
    cursor: Optional[date] = rule.anchor(_local_day(now, tz))
    while cursor is not None and len(window) < length:
        window.append(_format(cursor))
        cursor = rule.previous(cursor)
    window.reverse()
    return window


def toggle_completion(
    completions: Iterable[str],
    identifier: str,
    cadence: Optional[str] = None,
) -> frozenset[str]:
    """Return a new completion set with ``identifier`` flipped.

    When ``cadence`` is given the identifier must also fit that cadence.
    """

    if cadence is None:
        parse_identifier(identifier)
    else:
        _parse_completions([identifier], _rule_for(cadence))

    current = frozenset(completions)
    if identifier in current:
        return current - {identifier}
    return current | {identifier}


@dataclass(frozen=True, slots=True)
class StreakSummary:
    """Derived numbers for one habit card."""

    habit_id: str
    cadence: str
    current: int
    longest: int
    total: int
    completed_current_period: bool
    window: tuple[tuple[str, bool], ...]


def summarize(
    habit: Habit,
    now: Moment,
    window_length: int = DEFAULT_WINDOW_LENGTH,
    tz: Optional[tzinfo] = None,
) -> StreakSummary:
    """Compute the streak numbers and recent window for ``habit``."""

    completions = habit.completions
    current = current_streak(completions, habit.cadence, now, tz=tz)
    longest = longest_streak(completions, habit.cadence)
    window = tuple(
        (identifier, identifier in completions)
        for identifier in rolling_window(habit.cadence, now, window_length, tz=tz)
    )
    summary = StreakSummary(
        habit_id=habit.id,
        cadence=habit.cadence,
        current=current,
        longest=longest,
        total=len(completions),
        completed_current_period=period_identifier(habit.cadence, now, tz=tz) in completions,
        window=window,
    )
    logger.debug(
        "Summarized habit",
        extra={"habit_id": habit.id, "current": current, "longest": longest},
    )
    return summary


__all__ = [
    "DEFAULT_WINDOW_LENGTH",
    "StreakSummary",
    "current_streak",
    "format_week_range",
    "local_date_identifier",
    "longest_streak",
    "parse_identifier",
    "period_identifier",
    "rolling_window",
    "summarize",
    "toggle_completion",
    "week_date_range",
    "week_identifier",
    "week_start",
]
