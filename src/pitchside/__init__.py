"""Lineup editing for club hockey fixtures."""

__version__ = "0.1.0"
