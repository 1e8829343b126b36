"""
Domain-specific exception hierarchy for the free slot finder application.
"""


class FreeSlotError(Exception):
    """Base class for all application-level errors."""


class InvalidInputError(FreeSlotError, ValueError):
    """Raised when the caller supplies input the calculation cannot accept."""


class InvalidMeetingLengthError(InvalidInputError):
    """Raised when the minimum meeting length is not a positive number of minutes."""

    def __init__(self, length):
        self.length = length
        super().__init__(
            f"Minimum meeting length must be a positive number of minutes, got {length!r}"
        )


class MalformedIntervalError(InvalidInputError):
    """Raised when a booked interval ends before it starts."""

    def __init__(self, interval, person_id=None):
        self.interval = interval
        self.person_id = person_id
        owner = f" for person {person_id}" if person_id is not None else ""
        super().__init__(
            f"Malformed interval{owner}: end {interval.end} is before start {interval.start}"
        )


class OutOfRangeTimeError(InvalidInputError):
    """Raised when a time of day lies outside the day window."""

    def __init__(self, value, message: str | None = None):
        self.value = value
        super().__init__(
            message or f"Time of day must be within [0, 1440) minutes, got {value!r}"
        )


class CalendarDataError(FreeSlotError):
    """Raised when calendar data cannot be fetched or parsed."""
