"""Errors raised by the streak engine and habit records."""

from __future__ import annotations

from typing import Any


class StreakError(ValueError):
    """Base class for rejected streak input."""


class InvalidIdentifier(StreakError):
    """A completion identifier could not be read as a local date or week."""

    def __init__(self, identifier: Any, reason: str = "expected YYYY-MM-DD") -> None:
        self.identifier = identifier
        super().__init__(f"Invalid identifier {identifier!r}: {reason}")


class InvalidCadence(StreakError):
    """A cadence outside of the supported tags."""

    def __init__(self, cadence: Any) -> None:
        self.cadence = cadence
        super().__init__(f"Invalid cadence: {cadence!r} (expected 'daily' or 'weekly')")


__all__ = ["StreakError", "InvalidIdentifier", "InvalidCadence"]
