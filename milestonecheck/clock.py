"""
Clock abstraction for the evaluator's notion of "today".
"""

from datetime import date
from typing import Protocol


class Clock(Protocol):
    """Protocol for a source of the current calendar date."""

    def today(self) -> date:
        """Return today's date."""
        ...


class SystemClock:
    """Today's date in the process's local timezone."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """A clock pinned to one date."""

    def __init__(self, fixed: date):
        self.fixed = fixed

    def today(self) -> date:
        return self.fixed
