"""Command-line entry points for StreakChain."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

import click

from .config import BaseConfig
from .exceptions import StreakError
from .logging_config import get_logger, setup_logging
from .models.habit import CADENCES, Habit
from .services import streaks

logger = get_logger("cli")

_today_option = click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Pin the local day used as 'now' (YYYY-MM-DD).",
)
_cadence_option = click.option(
    "--cadence",
    type=click.Choice(CADENCES, case_sensitive=False),
    default="daily",
    show_default=True,
)


def _now(config: BaseConfig, today: Optional[datetime]):
    # --today is a naive local day; otherwise ask the config for an aware instant
    if today is not None:
        return today.date()
    return config.now()


def _reject(command: str, exc: Exception) -> click.ClickException:
    logger.warning("Rejected input", extra={"command": command, "error": str(exc)})
    return click.ClickException(str(exc))


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Streak counts for daily and weekly habits."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = config


@main.command("streak")
@_cadence_option
@_today_option
@click.argument("identifiers", nargs=-1)
@click.pass_obj
def streak_command(config: BaseConfig, cadence: str, today: Optional[datetime], identifiers: tuple[str, ...]) -> None:
    """Print the current streak for the given completion identifiers."""

    logger.info("streak", extra={"cadence": cadence, "count": len(identifiers)})
    try:
        value = streaks.current_streak(frozenset(identifiers), cadence, _now(config, today))
    except StreakError as exc:
        raise _reject("streak", exc) from exc
    click.echo(value)


@main.command("window")
@_cadence_option
@_today_option
@click.option("--length", type=click.IntRange(min=0), default=None, help="Number of periods.")
@click.pass_obj
def window_command(config: BaseConfig, cadence: str, today: Optional[datetime], length: Optional[int]) -> None:
    """Print the most recent period identifiers, oldest first."""

    size = config.WINDOW_LENGTH if length is None else length
    for identifier in streaks.rolling_window(cadence, _now(config, today), size):
        click.echo(identifier)


@main.command("week-range")
@click.argument("identifier")
def week_range_command(identifier: str) -> None:
    """Print the Monday and Sunday of a week identifier."""

    try:
        start, end = streaks.week_date_range(identifier)
    except StreakError as exc:
        raise _reject("week-range", exc) from exc
    click.echo(f"{start.isoformat()} {end.isoformat()} ({streaks.format_week_range(identifier)})")


@main.command("summary")
@_today_option
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def summary_command(config: BaseConfig, today: Optional[datetime], source) -> None:
    """Summarize every habit record in a JSON export."""

    try:
        records = json.load(source)
    except json.JSONDecodeError as exc:
        raise _reject("summary", exc) from exc
    if not isinstance(records, list):
        raise _reject("summary", ValueError("Expected a JSON array of habit records"))

    now = _now(config, today)
    logger.info("summary", extra={"habits": len(records)})
    for record in records:
        try:
            habit = Habit.from_record(record)
            summary = streaks.summarize(habit, now, config.WINDOW_LENGTH)
        except StreakError as exc:
            raise _reject("summary", exc) from exc
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise _reject("summary", ValueError(f"Invalid habit record: {exc}")) from exc

        strip = "".join("x" if done else "." for _, done in summary.window)
        click.echo(
            f"{habit.name} [{habit.cadence}] current={summary.current} "
            f"longest={summary.longest} total={summary.total} {strip}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
