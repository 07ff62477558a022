"""Habit records as supplied by the hosted store."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Mapping, Optional

from sqlmodel import Field, SQLModel

from ..exceptions import InvalidCadence

Cadence = Literal["daily", "weekly"]
CADENCES: tuple[str, ...] = ("daily", "weekly")
DEFAULT_CADENCE: Cadence = "daily"


def normalize_cadence(value: Any) -> Cadence:
    """Return the canonical cadence tag or raise ``InvalidCadence``."""

    if not isinstance(value, str):
        raise InvalidCadence(value)
    tag = value.strip().lower()
    if tag not in CADENCES:
        raise InvalidCadence(value)
    return tag  # type: ignore[return-value]


class Habit(SQLModel):
    """A named habit and the periods the user has marked complete.

    Rows live in the hosted store; this model only mirrors the row shape
    ``{id, name, cadence, completed_dates, created_at, updated_at}``.
    """

    id: str
    name: str = Field(max_length=80)
    cadence: str = Field(default=DEFAULT_CADENCE, max_length=16)
    completed_dates: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Habit":
        """Build a habit from a store row.

        Older rows carry the cadence under ``frequency``; ``cadence`` wins
        when both are present. A missing value takes the column default.
        """

        raw_cadence = record.get("cadence", record.get("frequency", DEFAULT_CADENCE))
        return cls(
            id=str(record["id"]),
            name=record["name"],
            cadence=normalize_cadence(raw_cadence),
            completed_dates=list(record.get("completed_dates") or []),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    @property
    def completions(self) -> frozenset[str]:
        """The completion set; array order and duplicates carry no meaning."""

        return frozenset(self.completed_dates)

    def to_record(self) -> dict[str, Any]:
        """Return the store row shape with dates in ascending order.

        The store keeps the cadence in its ``frequency`` column.
        """

        return {
            "id": self.id,
            "name": self.name,
            "frequency": self.cadence,
            "completed_dates": sorted(self.completions),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
