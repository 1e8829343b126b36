"""
Conversion of calendar timestamps into minute offsets for one reference day.

All conversions for a single computation use the timezone of the reference
day, so every booked interval is measured against the same midnight.
"""

from typing import Iterable, List, Optional, Tuple

import pendulum
from pendulum import DateTime

from ..domain.exceptions import OutOfRangeTimeError
from ..domain.models import TimeInterval


def reference_day(date_string: Optional[str], timezone: str) -> DateTime:
    """
    Resolve the reference day as midnight in ``timezone``.

    Args:
        date_string: Date in YYYY-MM-DD format, or None for today
        timezone: IANA timezone identifier

    Returns:
        Pendulum DateTime at the start of the day

    Raises:
        ValueError: If the date cannot be parsed
    """
    if not date_string:
        return pendulum.now(timezone).start_of("day")
    return pendulum.from_format(date_string, "YYYY-MM-DD", tz=timezone).start_of("day")


def to_time_of_day(moment: DateTime, day: DateTime) -> int:
    """
    Convert a timestamp into minutes since midnight of ``day``.

    Seconds are dropped. The timestamp is first moved into the day's timezone.

    Raises:
        OutOfRangeTimeError: If the timestamp falls on another calendar date
    """
    local = moment.in_timezone(day.timezone_name)
    minutes = local.hour * 60 + local.minute
    if local.date() != day.date():
        raise OutOfRangeTimeError(
            minutes,
            f"{local.to_iso8601_string()} is not on the reference day {day.to_date_string()}"
        )
    return minutes


def interval_from_moments(start: DateTime, end: DateTime, day: DateTime) -> TimeInterval:
    """Convert a pair of timestamps into a TimeInterval on ``day``."""
    return TimeInterval(start=to_time_of_day(start, day), end=to_time_of_day(end, day))


def _describe(start: DateTime, end: DateTime, owner: Optional[str]) -> str:
    label = f"Event {start.to_iso8601_string()} - {end.to_iso8601_string()}"
    return f"{label} of {owner}" if owner else label


def busy_for_day(
    events: Iterable[Tuple[DateTime, DateTime]],
    day: DateTime,
    owner: Optional[str] = None
) -> List[TimeInterval]:
    """
    Convert busy events into intervals on ``day``.

    Events entirely outside the day are skipped. Events crossing the start or
    end of the day (multi-day or all-day entries included) are rejected rather
    than clipped, and so are events whose wall-clock times run backwards in
    the repeated hour of a DST change. Error messages name the event and, when
    given, its ``owner``.

    Raises:
        OutOfRangeTimeError: If an event cannot be expressed as minutes on ``day``
    """
    day_start = day.start_of("day")
    day_end = day_start.add(days=1)
    intervals: List[TimeInterval] = []

    for start, end in events:
        if end <= day_start or start >= day_end:
            continue

        if start < day_start or end >= day_end:
            raise OutOfRangeTimeError(
                None,
                f"{_describe(start, end, owner)} crosses the boundary of "
                f"{day.to_date_string()}; only events within the day are supported"
            )

        interval = interval_from_moments(start, end, day)
        if start < end and interval.end < interval.start:
            raise OutOfRangeTimeError(
                None,
                f"{_describe(start, end, owner)} falls into the repeated hour of a "
                f"daylight saving change on {day.to_date_string()}; its wall-clock "
                f"times {interval} run backwards"
            )

        intervals.append(interval)

    return intervals
