"""Read-only projections of a roster for rendering the pitch and bench."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from pitchside.config.positions import Position, iter_positions
from pitchside.models import LineupPlayer

from .engine import (
    STARTING_SLOTS,
    bench_players,
    player_at_position,
    reserves,
    starters_count,
    unpositioned_starters,
)


@dataclass(frozen=True)
class PitchSlot:
    position: Position
    player: Optional[LineupPlayer]

    @property
    def is_empty(self) -> bool:
        return self.player is None


@dataclass(frozen=True)
class LineupView:
    slots: tuple[PitchSlot, ...]
    starters_count: int
    unpositioned_starters: tuple[LineupPlayer, ...]
    reserves: tuple[LineupPlayer, ...]
    bench: tuple[LineupPlayer, ...]
    target: int = STARTING_SLOTS

    @property
    def summary(self) -> str:
        return f"{self.starters_count}/{self.target}"


def project_lineup(roster: Sequence[LineupPlayer]) -> LineupView:
    players = tuple(roster)
    slots = tuple(
        PitchSlot(position=position, player=player_at_position(players, position))
        for position in iter_positions()
    )
    return LineupView(
        slots=slots,
        starters_count=starters_count(players),
        unpositioned_starters=unpositioned_starters(players),
        reserves=reserves(players),
        bench=bench_players(players),
    )


__all__ = ["LineupView", "PitchSlot", "project_lineup"]
