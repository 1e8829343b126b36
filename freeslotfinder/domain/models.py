"""
Domain models for minute-offset intervals within a single day.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pendulum import DateTime

# The day window is the half-open range [DAY_START, DAY_END) in minutes.
DAY_START = 0
DAY_END = 24 * 60


def format_minutes(minutes: int) -> str:
    """Render a minute offset as HH:MM (1440 renders as 24:00)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def moment_from_minutes(minutes: int, day: DateTime) -> DateTime:
    """
    Convert a minute offset back into a wall-clock timestamp on ``day``.

    Args:
        minutes: Minutes since midnight, between DAY_START and DAY_END
        day: Any timestamp on the reference day; only its date and timezone are used

    Returns:
        Pendulum DateTime in the day's timezone. DAY_END maps to the following midnight.
    """
    midnight = day.start_of("day")
    if minutes >= DAY_END:
        return midnight.add(days=1)
    return midnight.set(hour=minutes // 60, minute=minutes % 60)


@dataclass(frozen=True)
class TimeInterval:
    """
    A booked interval in minutes since midnight.

    Raw input is not validated on construction; ``SlotCalculator`` checks
    ordering and range before it merges anything.
    """
    start: int
    end: int

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def __str__(self) -> str:
        return f"{format_minutes(self.start)} - {format_minutes(self.end)}"


@dataclass
class Person:
    """A participant and their booked intervals for the reference day."""
    id: int
    busy: List[TimeInterval] = field(default_factory=list)
    name: Optional[str] = None

    def display_name(self) -> str:
        return self.name or f"#{self.id}"


@dataclass(frozen=True)
class FreeInterval:
    """
    A window available for booking on the reference day.
    """
    start: int
    end: int

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def reaches_midnight(self) -> bool:
        return self.end >= DAY_END

    def as_datetimes(self, day: DateTime) -> Tuple[DateTime, DateTime]:
        """Convert both bounds into timestamps on ``day``."""
        return moment_from_minutes(self.start, day), moment_from_minutes(self.end, day)

    def format_display(self, day: DateTime) -> str:
        """
        Format the interval for display.
        Format: HH:mm - HH:mm (N min), with "Midnight" for an open end of day.
        """
        start, end = self.as_datetimes(day)
        end_str = "Midnight" if self.reaches_midnight() else end.format("HH:mm")
        return f"{start.format('HH:mm')} - {end_str} ({self.duration_minutes()} min)"

    def __str__(self) -> str:
        return f"{format_minutes(self.start)} - {format_minutes(self.end)}"
