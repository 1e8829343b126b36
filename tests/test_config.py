"""
Tests for YAML configuration loading and person resolution.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from freeslotfinder.config import AppConfig, DefaultsConfig, GraphConfig, PersonConfig

CONFIG_YAML = """
timezone: Europe/Berlin
defaults:
  meeting_length_minutes: 45
calendar_file: data/calendar.json
people:
  - id: 1
    name: alice
    email: alice@example.com
  - id: 2
    name: Bob
    email: bob@example.com
"""


@pytest.fixture
def config():
    return AppConfig(
        people=[
            PersonConfig(id=1, name="alice", email="alice@example.com"),
            PersonConfig(id=2, name="Bob", email="bob@example.com"),
            PersonConfig(id=3, name="carol"),
        ]
    )


class TestLoadFromYaml:
    """Tests for AppConfig.load_from_yaml."""

    def test_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML, encoding="utf-8")

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "Europe/Berlin"
        assert config.defaults.meeting_length_minutes == 45
        assert [person.name for person in config.people] == ["alice", "Bob"]
        assert config.calendar_file == tmp_path / "data" / "calendar.json"
        assert config.graph.access_token_env == "FREESLOTS_GRAPH_TOKEN"

    def test_absolute_calendar_file_kept(self, tmp_path):
        calendar = tmp_path / "elsewhere" / "calendar.json"
        path = tmp_path / "config.yaml"
        path.write_text(f"calendar_file: {calendar}\n", encoding="utf-8")

        assert AppConfig.load_from_yaml(path).calendar_file == calendar

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        config = AppConfig.load_from_yaml(path)

        assert config.defaults.meeting_length_minutes == 30
        assert config.people == []
        assert config.calendar_file is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("people: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    def test_example_config_is_valid(self):
        path = Path(__file__).parent.parent / "config.example.yaml"

        config = AppConfig.load_from_yaml(path)

        assert config.calendar_file.exists()


class TestValidation:
    """Tests for field validators."""

    @pytest.mark.parametrize("length", [0, -1, 1441])
    def test_meeting_length_bounds(self, length):
        with pytest.raises(ValidationError):
            DefaultsConfig(meeting_length_minutes=length)

    def test_full_day_meeting_length_allowed(self):
        assert DefaultsConfig(meeting_length_minutes=1440).meeting_length_minutes == 1440

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppConfig(timezone="Mars/Olympus_Mons")

    @pytest.mark.parametrize("people", [
        [{"id": 1, "name": "a"}, {"id": 1, "name": "b"}],
        [{"id": 1, "name": "Alice"}, {"id": 2, "name": "alice"}],
        [{"id": 1, "name": "a", "email": "x@example.com"},
         {"id": 2, "name": "b", "email": "X@example.com"}],
    ])
    def test_duplicates_rejected(self, people):
        with pytest.raises(ValidationError, match="Duplicate"):
            AppConfig(people=people)

    def test_people_without_email_allowed(self):
        config = AppConfig(people=[{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])

        assert len(config.people) == 2


class TestResolvePeople:
    """Tests for AppConfig.resolve_people."""

    def test_resolve_by_name_email_and_id(self, config):
        resolved = config.resolve_people(["bob", "ALICE@example.com", "3"])

        assert [person.id for person in resolved] == [2, 1, 3]

    def test_duplicates_collapsed(self, config):
        resolved = config.resolve_people(["alice", "1", "alice@example.com"])

        assert [person.id for person in resolved] == [1]

    def test_empty_selects_everyone(self, config):
        assert [person.id for person in config.resolve_people([])] == [1, 2, 3]

    def test_empty_without_people(self):
        with pytest.raises(ValueError, match="none configured"):
            AppConfig().resolve_people([])

    def test_unknown_identifiers_reported_together(self, config):
        with pytest.raises(ValueError, match="dave, eve"):
            config.resolve_people(["eve", "alice", "dave"])


class TestGraphConfig:
    """Tests for the Graph token lookup."""

    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("MY_TOKEN", " abc ")

        assert GraphConfig(access_token_env="MY_TOKEN").get_access_token() == "abc"

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("FREESLOTS_GRAPH_TOKEN", raising=False)

        with pytest.raises(ValueError, match="FREESLOTS_GRAPH_TOKEN"):
            GraphConfig().get_access_token()
