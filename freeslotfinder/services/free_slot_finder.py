"""
Application services for finding shared free meeting slots.

The service coordinates fetching booked intervals via a calendar client
adapter and delegates the actual gap calculation to the domain-level
``SlotCalculator``. This keeps the CLI thin and improves testability by
allowing the calendar dependency to be replaced via a simple protocol.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence

from pendulum import DateTime

from ..config import PersonConfig
from ..domain.models import FreeInterval, Person, TimeInterval
from ..domain.slot_calculator import SlotCalculator


class CalendarClientProtocol(Protocol):
    """Protocol describing the calendar client behaviour needed by the service."""

    def get_people(
        self,
        people: Sequence[PersonConfig],
        day: DateTime,
    ) -> List[Person]:
        """Return each person with their busy intervals on ``day``."""


class FreeSlotFinderService:
    """
    Orchestrates busy-time retrieval and free interval calculation.
    """

    def __init__(
        self,
        calendar_client: CalendarClientProtocol,
        slot_calculator: SlotCalculator | None = None,
    ) -> None:
        self._calendar_client = calendar_client
        self._slot_calculator = slot_calculator or SlotCalculator()

    def fetch_people(
        self,
        *,
        people: Sequence[PersonConfig],
        day: DateTime,
    ) -> List[Person]:
        """Fetch busy intervals for the requested people."""
        people_list = list(people)
        fetched = self._calendar_client.get_people(people_list, day)
        return self._ensure_person_entries(people_list, fetched)

    def calculate_slots(
        self,
        persons: Sequence[Person],
        minimum_meeting_length: int,
    ) -> List[FreeInterval]:
        """Calculate the free intervals of the day from fetched busy data."""
        return self._slot_calculator.find_free_intervals(persons, minimum_meeting_length)

    def busy_blocks(self, persons: Sequence[Person]) -> List[TimeInterval]:
        """Merged busy blocks of everyone, for display alongside the free intervals."""
        return self._slot_calculator.merge(self._slot_calculator.collect(persons))

    @staticmethod
    def _ensure_person_entries(
        people: Sequence[PersonConfig],
        fetched: Sequence[Person],
    ) -> List[Person]:
        """
        Ensure every requested person appears in the result.

        Calendar sources might omit people without events; we normalise
        that to an explicit empty busy list for deterministic downstream behaviour.
        """
        by_id = {person.id: person for person in fetched}
        normalized: List[Person] = [
            by_id.get(person.id) or Person(id=person.id, name=person.name)
            for person in people
        ]

        # Include any additional entries provided by the client as-is.
        requested_ids = {person.id for person in people}
        normalized.extend(person for person in fetched if person.id not in requested_ids)

        return normalized
