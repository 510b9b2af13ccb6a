"""Shared data models."""

from .player import LineupPlayer

__all__ = ["LineupPlayer"]
