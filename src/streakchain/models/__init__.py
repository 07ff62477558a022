"""Habit record exports."""

from .habit import CADENCES, DEFAULT_CADENCE, Cadence, Habit, normalize_cadence

__all__ = [
    "CADENCES",
    "DEFAULT_CADENCE",
    "Cadence",
    "Habit",
    "normalize_cadence",
]
