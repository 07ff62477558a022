"""Service module exports."""

from . import streaks

__all__ = ["streaks"]
