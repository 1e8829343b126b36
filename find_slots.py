#!/usr/bin/env python3
"""
Convenience entry point for running freeslotfinder directly.

Usage: python find_slots.py [command] [options]
"""

from freeslotfinder.cli.app import app

if __name__ == "__main__":
    app()
