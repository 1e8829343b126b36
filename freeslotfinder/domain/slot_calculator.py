"""
Core business logic for calculating free meeting intervals.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from typing import Iterable, List, Sequence

from .exceptions import (
    InvalidMeetingLengthError,
    MalformedIntervalError,
    OutOfRangeTimeError,
)
from .models import DAY_END, DAY_START, FreeInterval, Person, TimeInterval

logger = logging.getLogger(__name__)


def _is_minute_value(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class SlotCalculator:
    """
    Calculates free meeting intervals for a group of people on one day.

    Algorithm:
    1. Validate the meeting length and every booked interval up front
    2. Collect all booked intervals of all people into one list
    3. Merge overlapping or touching intervals into disjoint busy blocks
    4. Walk the busy blocks across [00:00, 24:00) and keep the gaps that
       are at least as long as the meeting
    """

    def find_free_intervals(
        self,
        persons: Sequence[Person],
        minimum_meeting_length: int
    ) -> List[FreeInterval]:
        """
        Find every free interval long enough for the meeting.

        Args:
            persons: People whose booked intervals must be avoided
            minimum_meeting_length: Minimum gap length in minutes

        Returns:
            Free intervals in ascending order

        Raises:
            InvalidMeetingLengthError: If the meeting length is not positive
            OutOfRangeTimeError: If a booked time lies outside the day
            MalformedIntervalError: If a booked interval ends before it starts
        """
        self.validate(persons, minimum_meeting_length)

        busy = self.collect(persons)
        merged = self.merge(busy)
        free = self.extract_gaps(merged, minimum_meeting_length)

        logger.debug(
            "Computed %d free interval(s) from %d booked interval(s) of %d person(s), "
            "%d busy block(s) after merging",
            len(free), len(busy), len(persons), len(merged)
        )
        return free

    def validate(self, persons: Sequence[Person], minimum_meeting_length: int) -> None:
        """
        Check all input before any computation so that no partial result is produced.
        """
        if not _is_minute_value(minimum_meeting_length) or minimum_meeting_length <= 0:
            raise InvalidMeetingLengthError(minimum_meeting_length)

        for person in persons:
            for interval in person.busy:
                for value in (interval.start, interval.end):
                    if not _is_minute_value(value):
                        raise OutOfRangeTimeError(
                            value,
                            f"Time of day must be an integer number of minutes, "
                            f"got {value!r} for person {person.id}"
                        )
                    if not DAY_START <= value < DAY_END:
                        raise OutOfRangeTimeError(
                            value,
                            f"Time of day must be within [{DAY_START}, {DAY_END}) "
                            f"minutes, got {value} for person {person.id}"
                        )
                if interval.end < interval.start:
                    raise MalformedIntervalError(interval, person_id=person.id)

    @staticmethod
    def collect(persons: Iterable[Person]) -> List[TimeInterval]:
        """
        Flatten the booked intervals of all people into one list.

        Intervals are copied, so the caller's objects are never touched.
        """
        return [
            TimeInterval(start=interval.start, end=interval.end)
            for person in persons
            for interval in person.busy
        ]

    @staticmethod
    def merge(intervals: Iterable[TimeInterval]) -> List[TimeInterval]:
        """
        Merge overlapping or touching intervals into disjoint busy blocks.

        Example: [09:00-10:00, 10:00-11:00, 10:30-12:00] -> [09:00-12:00]

        Zero-length intervals cover no time and are dropped.

        Raises:
            MalformedIntervalError: If an interval ends before it starts
        """
        kept: List[TimeInterval] = []
        for interval in intervals:
            if interval.end < interval.start:
                raise MalformedIntervalError(interval)
            if interval.end > interval.start:
                kept.append(interval)

        sorted_intervals = sorted(kept, key=lambda i: (i.start, i.end))
        merged: List[TimeInterval] = []

        for current in sorted_intervals:
            # A strict gap starts a new block; touching intervals are merged
            if not merged or merged[-1].end < current.start:
                merged.append(TimeInterval(start=current.start, end=current.end))
            else:
                last = merged[-1]
                merged[-1] = TimeInterval(start=last.start, end=max(last.end, current.end))

        return merged

    @staticmethod
    def extract_gaps(
        merged: Sequence[TimeInterval],
        minimum_meeting_length: int
    ) -> List[FreeInterval]:
        """
        Walk the merged busy blocks and return the gaps of at least the meeting length.

        Example:
        Busy: [09:00-10:30, 12:00-13:00], length 30
        Result: [00:00-09:00, 10:30-12:00, 13:00-24:00]
        """
        free: List[FreeInterval] = []
        previous_end = DAY_START

        for block in merged:
            if block.start - previous_end >= minimum_meeting_length:
                free.append(FreeInterval(start=previous_end, end=block.start))
            previous_end = max(previous_end, block.end)

        # Remaining time after the last booking until midnight
        if DAY_END - previous_end >= minimum_meeting_length:
            free.append(FreeInterval(start=previous_end, end=DAY_END))

        return free


def compute_free_intervals(
    persons: Sequence[Person],
    minimum_meeting_length: int
) -> List[FreeInterval]:
    """Compute free intervals for ``persons`` over the full day window."""
    return SlotCalculator().find_free_intervals(persons, minimum_meeting_length)
