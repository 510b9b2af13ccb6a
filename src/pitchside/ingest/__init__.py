"""Input adapters that normalize raw roster data."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    RosterLoadReport,
    RosterRow,
    demo_roster,
    load_roster,
    load_roster_csv,
    load_roster_json,
    normalize_roster,
    rows_to_roster,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "RosterLoadReport",
    "RosterRow",
    "demo_roster",
    "load_roster",
    "load_roster_csv",
    "load_roster_json",
    "normalize_roster",
    "rows_to_roster",
]
