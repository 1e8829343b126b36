"""
Tests for the JSON calendar file client.
"""

import json

import pytest

from freeslotfinder.adapters.calendar_file import CalendarFileClient
from freeslotfinder.domain.exceptions import CalendarDataError, OutOfRangeTimeError
from freeslotfinder.domain.models import TimeInterval


@pytest.fixture
def write_calendar(tmp_path):
    def _write(events):
        path = tmp_path / "calendar.json"
        path.write_text(json.dumps(events), encoding="utf-8")
        return path
    return _write


class TestCalendarFileClient:
    """Tests for CalendarFileClient."""

    def test_busy_events_per_person(self, write_calendar, people_config, day):
        path = write_calendar([
            {"personId": 1, "start": "2024-11-25T09:00:00", "end": "2024-11-25T10:30:00"},
            {"personId": 2, "start": "2024-11-25T11:00:00", "end": "2024-11-25T11:30:00",
             "status": "Tentative"},
            {"personId": 1, "start": "2024-11-25T12:00:00", "end": "2024-11-25T13:00:00",
             "status": "busy"},
        ])

        persons = CalendarFileClient(path, timezone="Europe/Berlin").get_people(people_config, day)

        assert [person.id for person in persons] == [1, 2]
        assert persons[0].name == "alice"
        assert persons[0].busy == [TimeInterval(540, 630), TimeInterval(720, 780)]
        assert persons[1].busy == [TimeInterval(660, 690)]

    def test_free_events_ignored(self, write_calendar, people_config, day):
        path = write_calendar([
            {"personId": 1, "start": "2024-11-25T09:00:00", "end": "2024-11-25T10:00:00",
             "status": "free"},
        ])

        persons = CalendarFileClient(path).get_people(people_config, day)

        assert persons[0].busy == []

    def test_other_people_and_days_ignored(self, write_calendar, people_config, day):
        path = write_calendar([
            {"personId": 99, "start": "not parsed", "end": "not parsed"},
            {"personId": 2, "start": "2024-11-26T09:00:00", "end": "2024-11-26T10:00:00"},
        ])

        persons = CalendarFileClient(path).get_people(people_config, day)

        assert [person.busy for person in persons] == [[], []]

    def test_offsets_converted_to_client_timezone(self, write_calendar, people_config, day):
        path = write_calendar([
            {"personId": 1, "start": "2024-11-25T08:00:00Z", "end": "2024-11-25T09:15:00+00:00"},
        ])

        persons = CalendarFileClient(path, timezone="Europe/Berlin").get_people(people_config, day)

        assert persons[0].busy == [TimeInterval(540, 615)]

    def test_event_crossing_midnight(self, write_calendar, people_config, day):
        path = write_calendar([
            {"personId": 1, "start": "2024-11-25T23:00:00", "end": "2024-11-26T01:00:00"},
        ])

        with pytest.raises(OutOfRangeTimeError):
            CalendarFileClient(path).get_people(people_config, day)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CalendarDataError, match="not found"):
            CalendarFileClient(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "calendar.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CalendarDataError):
            CalendarFileClient(path)

    def test_root_must_be_list(self, write_calendar):
        with pytest.raises(CalendarDataError, match="list of events"):
            CalendarFileClient(write_calendar({"events": []}))

    def test_invalid_timestamp(self, write_calendar, people_config, day):
        path = write_calendar([{"personId": 1, "start": "yesterday-ish", "end": "2024-11-25T10:00:00"}])

        with pytest.raises(CalendarDataError, match="#0"):
            CalendarFileClient(path).get_people(people_config, day)

    def test_numeric_string_person_id(self, write_calendar, people_config, day):
        path = write_calendar([
            {"personId": "1", "start": "2024-11-25T09:00:00", "end": "2024-11-25T10:00:00"},
        ])

        persons = CalendarFileClient(path).get_people(people_config, day)

        assert persons[0].busy == [TimeInterval(540, 600)]

    @pytest.mark.parametrize("person_id", ["alice", 1.5, None, True])
    def test_invalid_person_id(self, write_calendar, people_config, day, person_id):
        path = write_calendar([
            {"personId": person_id, "start": "2024-11-25T09:00:00", "end": "2024-11-25T10:00:00"},
        ])

        with pytest.raises(CalendarDataError, match="personId"):
            CalendarFileClient(path).get_people(people_config, day)

    def test_missing_end(self, write_calendar, people_config, day):
        path = write_calendar([{"personId": 1, "start": "2024-11-25T09:00:00"}])

        with pytest.raises(CalendarDataError):
            CalendarFileClient(path).get_people(people_config, day)
