"""
Adapters layer - Calendar sources and timestamp conversion.
"""

from .calendar_file import CalendarFileClient
from .graph_client import GraphClient

__all__ = ["CalendarFileClient", "GraphClient"]
