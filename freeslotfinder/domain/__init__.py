"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import DAY_END, DAY_START, FreeInterval, Person, TimeInterval
from .slot_calculator import SlotCalculator, compute_free_intervals

__all__ = [
    "DAY_END",
    "DAY_START",
    "FreeInterval",
    "Person",
    "TimeInterval",
    "SlotCalculator",
    "compute_free_intervals",
]
