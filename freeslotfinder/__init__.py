"""
freeslotfinder - find common free meeting slots on a single day.
"""

__version__ = "0.1.0"
