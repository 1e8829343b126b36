"""
Calendar client backed by a local JSON file of busy events.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import pendulum
from pendulum import DateTime

from ..config import PersonConfig
from ..domain.exceptions import CalendarDataError
from ..domain.models import Person
from .ingestion import busy_for_day

logger = logging.getLogger(__name__)

# Free/busy statuses that block a person's time
BUSY_STATUSES = ("busy", "tentative", "oof", "workingelsewhere")


class CalendarFileClient:
    """
    Loads busy events from a JSON file.

    The file holds a list of events:

        [{"personId": 1, "start": "2024-11-25T09:00", "end": "2024-11-25T10:30",
          "status": "busy"}]

    Timestamps without an offset are read in the client's timezone. Events
    without a status count as busy.
    """

    def __init__(self, path: Path, timezone: str = "Europe/Berlin"):
        self.path = Path(path)
        self.timezone = timezone
        self.events = self._load_events()

    def _load_events(self) -> List[Dict[str, Any]]:
        """Load the raw event list from disk."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise CalendarDataError(f"Calendar file not found: {self.path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise CalendarDataError(f"Could not read calendar file {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise CalendarDataError(f"Calendar file {self.path} must contain a list of events.")

        logger.debug("Loaded %d event(s) from %s", len(data), self.path)
        return data

    def _parse_event(self, index: int, event: Dict[str, Any]) -> Tuple[DateTime, DateTime]:
        try:
            start = pendulum.parse(event["start"], tz=self.timezone)
            end = pendulum.parse(event["end"], tz=self.timezone)
        except (KeyError, TypeError, ValueError) as exc:
            raise CalendarDataError(
                f"Invalid event #{index} in {self.path}: {exc}"
            ) from exc

        if not isinstance(start, DateTime) or not isinstance(end, DateTime):
            raise CalendarDataError(
                f"Invalid event #{index} in {self.path}: start and end must be date-times"
            )
        return start, end

    def _person_id(self, index: int, event: Dict[str, Any]) -> int:
        """Read ``personId`` as an integer; numeric strings are accepted."""
        value = event.get("personId")
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise CalendarDataError(
                f"Invalid event #{index} in {self.path}: personId must be an integer, got {value!r}"
            )
        try:
            return int(value)
        except ValueError as exc:
            raise CalendarDataError(
                f"Invalid event #{index} in {self.path}: personId must be an integer, got {value!r}"
            ) from exc

    def get_people(self, people: Sequence[PersonConfig], day: DateTime) -> List[Person]:
        """
        Build Person records with their busy intervals on ``day``.

        Args:
            people: Configured people to look up
            day: Reference day

        Returns:
            One Person per requested entry, in the same order
        """
        events_by_person: Dict[int, List[Tuple[DateTime, DateTime]]] = {
            person.id: [] for person in people
        }

        for index, event in enumerate(self.events):
            if not isinstance(event, dict):
                raise CalendarDataError(f"Invalid event #{index} in {self.path}: not an object")

            person_id = self._person_id(index, event)
            if person_id not in events_by_person:
                continue

            status = str(event.get("status", "busy")).lower()
            if status not in BUSY_STATUSES:
                continue

            events_by_person[person_id].append(self._parse_event(index, event))

        return [
            Person(
                id=person.id,
                name=person.name,
                busy=busy_for_day(events_by_person[person.id], day, owner=person.name)
            )
            for person in people
        ]
