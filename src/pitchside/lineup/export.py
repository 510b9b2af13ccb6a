"""CSV export helpers for fixture lineups."""

from __future__ import annotations

import csv
from collections import Counter
from io import StringIO
from typing import Sequence

from pitchside.config.positions import PositionCode, iter_positions
from pitchside.models import LineupPlayer

from .engine import reserves, unpositioned_starters


class LineupExportError(RuntimeError):
    """Raised when a roster cannot be exported as a lineup sheet."""


EXPORT_HEADERS: tuple[str, ...] = (
    "slot",
    "position",
    "player_id",
    "name",
    "number",
    "is_starting",
    "preferred_position",
)


def _check_occupancy(roster: Sequence[LineupPlayer]) -> None:
    counts = Counter(
        player.position for player in roster if player.position is not None and player.is_starter
    )
    doubled = sorted(code.value for code, count in counts.items() if count > 1)
    if doubled:
        raise LineupExportError(f"Positions held by more than one player: {', '.join(doubled)}")


def _pitch_occupant(roster: Sequence[LineupPlayer], code: PositionCode) -> LineupPlayer | None:
    # A demoted player with a stale position is listed on the bench only.
    return next((p for p in roster if p.is_starter and p.position == code), None)


def _row(slot: str, position: str, player: LineupPlayer | None) -> list[object]:
    if player is None:
        return [slot, position, "", "", "", "", ""]
    preferred = player.preferred_position.value if player.preferred_position else ""
    return [
        slot,
        position,
        player.player_id,
        player.name,
        player.number,
        "true" if player.is_starter else "false",
        preferred,
    ]


def export_lineup_to_csv(roster: Sequence[LineupPlayer], *, include_empty: bool = True) -> str:
    """Render pitch slots in catalog order, then unpositioned starters, then reserves."""

    _check_occupancy(roster)

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)

    for position in iter_positions():
        player = _pitch_occupant(roster, position.code)
        if player is None and not include_empty:
            continue
        writer.writerow(_row("pitch", position.code.value, player))
    for player in unpositioned_starters(roster):
        writer.writerow(_row("unpositioned", "", player))
    for player in reserves(roster):
        writer.writerow(_row("bench", "", player))

    return buffer.getvalue()


def lineup_rows(fixture_id: str, roster: Sequence[LineupPlayer]) -> list[dict]:
    """Rows in the shape the lineup store upserts, keyed by (fixture_id, player_id)."""

    return [
        {
            "fixture_id": fixture_id,
            "player_id": player.player_id,
            "position": player.position.value if player.position else None,
            "is_starting": player.is_starter,
        }
        for player in roster
    ]


__all__ = [
    "EXPORT_HEADERS",
    "LineupExportError",
    "export_lineup_to_csv",
    "lineup_rows",
]
