"""
Configuration management using Pydantic models loaded from YAML.
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import DAY_END


class DefaultsConfig(BaseModel):
    """Default settings for search."""
    meeting_length_minutes: int = 30

    @field_validator("meeting_length_minutes")
    @classmethod
    def validate_meeting_length(cls, value: int) -> int:
        """Ensure meeting length fits into one day."""
        if not 0 < value <= DAY_END:
            raise ValueError(f"meeting_length_minutes must be between 1 and {DAY_END}, got {value}")
        return value


class GraphConfig(BaseModel):
    """Microsoft Graph settings."""
    access_token_env: str = "FREESLOTS_GRAPH_TOKEN"
    timeout_seconds: int = 30

    def get_access_token(self) -> str:
        """
        Read the bearer token from the configured environment variable.

        Raises:
            ValueError: If the variable is unset or empty
        """
        token = os.environ.get(self.access_token_env, "").strip()
        if not token:
            raise ValueError(
                f"No Microsoft Graph access token found. Set the {self.access_token_env} "
                f"environment variable."
            )
        return token


class PersonConfig(BaseModel):
    """Person/Participant configuration."""
    id: int
    name: str  # Used as alias
    email: str = ""


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    calendar_file: Optional[Path] = None
    graph: GraphConfig = Field(default_factory=GraphConfig)
    people: List[PersonConfig] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("people")
    @classmethod
    def validate_people(cls, value: List[PersonConfig]) -> List[PersonConfig]:
        """Ensure person ids, aliases and emails are unique."""
        seen_ids: set[int] = set()
        seen_names: set[str] = set()
        seen_emails: set[str] = set()
        for person in value:
            name_key = person.name.lower()
            email_key = person.email.lower()
            if person.id in seen_ids:
                raise ValueError(f"Duplicate person id detected: {person.id}")
            if name_key in seen_names:
                raise ValueError(f"Duplicate person name detected: {person.name}")
            if email_key and email_key in seen_emails:
                raise ValueError(f"Duplicate person email detected: {person.email}")
            seen_ids.add(person.id)
            seen_names.add(name_key)
            if email_key:
                seen_emails.add(email_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Relative ``calendar_file`` paths are resolved against the config file's directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.calendar_file is not None and not config.calendar_file.is_absolute():
            config.calendar_file = config_path.parent / config.calendar_file
        return config

    def find_person(self, identifier: str) -> PersonConfig | None:
        """Find a person by name (alias), email or numeric id."""
        key = identifier.strip().lower()
        for person in self.people:
            if person.name.lower() == key or (person.email and person.email.lower() == key):
                return person
            if key.isdigit() and person.id == int(key):
                return person
        return None

    def resolve_people(self, identifiers: Sequence[str]) -> List[PersonConfig]:
        """
        Resolve person identifiers, ensuring uniqueness.

        An empty sequence selects every configured person.

        Raises:
            ValueError: If any identifier is unknown or nobody is configured
        """
        if not identifiers:
            if not self.people:
                raise ValueError("No people provided and none configured.")
            return list(self.people)

        resolved: List[PersonConfig] = []
        unknown_identifiers: List[str] = []

        for identifier in identifiers:
            person = self.find_person(identifier)
            if person is None:
                unknown_identifiers.append(identifier)
                continue

            if person not in resolved:
                resolved.append(person)

        if unknown_identifiers:
            missing = ", ".join(sorted(set(unknown_identifiers)))
            raise ValueError(
                f"Unknown person identifier(s): {missing}. "
                "Use a configured name, email or id."
            )

        return resolved


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
