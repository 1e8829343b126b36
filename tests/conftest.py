"""
Shared fixtures for the test suite.
"""

import pendulum
import pytest

from freeslotfinder.config import PersonConfig
from freeslotfinder.domain.models import Person, TimeInterval


@pytest.fixture
def day():
    """Monday, 25 November 2024 in Berlin (no DST change)."""
    return pendulum.datetime(2024, 11, 25, tz="Europe/Berlin")


@pytest.fixture
def example_persons():
    """Two people: 09:00-10:30 and 12:00-13:00, plus 11:00-11:30."""
    return [
        Person(id=1, busy=[TimeInterval(540, 630), TimeInterval(720, 780)]),
        Person(id=2, busy=[TimeInterval(660, 690)]),
    ]


@pytest.fixture
def people_config():
    return [
        PersonConfig(id=1, name="alice", email="alice@example.com"),
        PersonConfig(id=2, name="bob", email="Bob@Example.com"),
    ]
