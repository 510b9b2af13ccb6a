"""Candidate filtering for the position picker dialog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from pitchside.config.positions import PositionRef, parse_position
from pitchside.models import LineupPlayer


@dataclass(frozen=True)
class CandidateGroups:
    """Players offered for a position, recommended first."""

    recommended: tuple[LineupPlayer, ...]
    others: tuple[LineupPlayer, ...]

    @property
    def is_empty(self) -> bool:
        return not self.recommended and not self.others

    def __len__(self) -> int:
        return len(self.recommended) + len(self.others)

    def empty_message(self, query: Optional[str]) -> Optional[str]:
        if not self.is_empty:
            return None
        return "No players found" if query and query.strip() else "No available players"


def matches_query(player: LineupPlayer, query: Optional[str]) -> bool:
    text = (query or "").strip().lower()
    if not text:
        return True
    return text in player.name.lower() or text in str(player.number)


def filter_candidates(
    roster: Sequence[LineupPlayer],
    query: Optional[str],
    position: Optional[PositionRef],
) -> CandidateGroups:
    """Filter the roster by name or shirt number and split by preferred position.

    Roster order is preserved inside each group. An unknown target position
    yields no recommendations.
    """

    target = parse_position(position)
    recommended: list[LineupPlayer] = []
    others: list[LineupPlayer] = []
    for player in roster:
        if not matches_query(player, query):
            continue
        if target is not None and player.preferred_position == target:
            recommended.append(player)
        else:
            others.append(player)
    return CandidateGroups(recommended=tuple(recommended), others=tuple(others))


__all__ = ["CandidateGroups", "filter_candidates", "matches_query"]
