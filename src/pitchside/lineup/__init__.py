"""Lineup editing: assignment rules, candidate filtering, views and drag handling."""

from .engine import (
    STARTING_SLOTS,
    AssignmentOutcome,
    AssignmentResult,
    Roster,
    assign_checked,
    assign_to_position,
    bench_checked,
    bench_players,
    move_to_bench,
    player_at_position,
    reserves,
    starters_count,
    unpositioned_starters,
)
from .selection import CandidateGroups, filter_candidates
from .view import LineupView, PitchSlot, project_lineup
from .drag import BENCH, DragController, DragState, PointerAdapter, TouchAdapter, adapter_for
from .session import LineupSession
from .export import LineupExportError, export_lineup_to_csv, lineup_rows

__all__ = [
    "STARTING_SLOTS",
    "AssignmentOutcome",
    "AssignmentResult",
    "Roster",
    "assign_checked",
    "assign_to_position",
    "bench_checked",
    "bench_players",
    "move_to_bench",
    "player_at_position",
    "reserves",
    "starters_count",
    "unpositioned_starters",
    "CandidateGroups",
    "filter_candidates",
    "LineupView",
    "PitchSlot",
    "project_lineup",
    "BENCH",
    "DragController",
    "DragState",
    "PointerAdapter",
    "TouchAdapter",
    "adapter_for",
    "LineupSession",
    "LineupExportError",
    "export_lineup_to_csv",
    "lineup_rows",
]
