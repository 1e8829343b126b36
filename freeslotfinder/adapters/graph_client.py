"""
Microsoft Graph API client for fetching free/busy data.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

import pendulum
import requests
from pendulum import DateTime

from ..config import PersonConfig
from ..domain.exceptions import CalendarDataError
from ..domain.models import Person
from .calendar_file import BUSY_STATUSES
from .ingestion import busy_for_day

logger = logging.getLogger(__name__)


class GraphClient:
    """
    Client for Microsoft Graph API calendar operations.

    Uses the /calendar/getSchedule endpoint to fetch free/busy information
    for the reference day.
    """

    GRAPH_API_ENDPOINT = "https://graph.microsoft.com/v1.0"

    def __init__(self, access_token: str, timeout_seconds: int = 30):
        """
        Initialize the Graph API client.

        Args:
            access_token: Valid Microsoft Graph access token
            timeout_seconds: Request timeout
        """
        self.access_token = access_token
        self.timeout_seconds = timeout_seconds
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json"
        }

    def get_people(self, people: Sequence[PersonConfig], day: DateTime) -> List[Person]:
        """
        Get busy intervals on ``day`` for the given people.

        Raises:
            CalendarDataError: If the API call fails
        """
        emails = [person.email.lower() for person in people]
        window_start = day.start_of("day")
        window_end = window_start.add(days=1)

        url = f"{self.GRAPH_API_ENDPOINT}/me/calendar/getSchedule"
        payload = {
            "schedules": emails,
            "startTime": {
                "dateTime": window_start.naive().isoformat(),
                "timeZone": day.timezone_name
            },
            "endTime": {
                "dateTime": window_end.naive().isoformat(),
                "timeZone": day.timezone_name
            },
            "availabilityViewInterval": 15
        }

        try:
            response = requests.post(
                url,
                headers=self.headers,
                json=payload,
                timeout=self.timeout_seconds
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise CalendarDataError(f"Failed to fetch schedule from Microsoft Graph: {e}") from e
        except ValueError as e:
            raise CalendarDataError(f"Microsoft Graph returned invalid JSON: {e}") from e

        events = self._parse_schedule_response(data, day.timezone_name)

        return [
            Person(
                id=person.id,
                name=person.name,
                busy=busy_for_day(events.get(person.email.lower(), []), day, owner=person.name)
            )
            for person in people
        ]

    def _parse_schedule_response(
        self,
        response_data: Dict[str, Any],
        timezone: str
    ) -> Dict[str, List[Tuple[DateTime, DateTime]]]:
        """
        Parse the getSchedule API response into busy event pairs per email.

        Response format:
        {
            "value": [
                {
                    "scheduleId": "user@example.com",
                    "scheduleItems": [
                        {
                            "status": "busy",
                            "start": {"dateTime": "...", "timeZone": "..."},
                            "end": {"dateTime": "...", "timeZone": "..."}
                        }
                    ]
                }
            ]
        }
        """
        events: Dict[str, List[Tuple[DateTime, DateTime]]] = {}

        for schedule in response_data.get("value", []):
            email = schedule.get("scheduleId", "").lower()
            busy: List[Tuple[DateTime, DateTime]] = []

            for item in schedule.get("scheduleItems", []):
                status = item.get("status", "").lower()
                if status not in BUSY_STATUSES:
                    continue

                try:
                    start = self._parse_datetime(item["start"], timezone)
                    end = self._parse_datetime(item["end"], timezone)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning("Could not parse schedule item for %s: %s", email, e)
                    continue

                busy.append((start, end))

            events[email] = busy

        return events

    def _parse_datetime(self, value: Dict[str, str], timezone: str) -> DateTime:
        """
        Parse a Graph dateTimeTimeZone object into the target timezone.
        """
        dt = pendulum.parse(value["dateTime"], tz=value.get("timeZone") or "UTC")

        if isinstance(dt, DateTime):
            return dt.in_timezone(timezone)

        raise ValueError(f"Could not parse datetime: {value['dateTime']}")
