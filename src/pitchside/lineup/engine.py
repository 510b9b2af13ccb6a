"""Assignment rules for placing roster players on pitch positions.

Every function here is pure: it takes a roster (any ordered sequence of
``LineupPlayer``) and returns a new tuple, leaving the input untouched.
Unknown player or position references never raise; the public helpers
degrade to a no-op and the ``*_checked`` variants report why through
``AssignmentOutcome``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from pitchside.config.positions import PositionRef, parse_position
from pitchside.models import LineupPlayer


Roster = Tuple[LineupPlayer, ...]

STARTING_SLOTS = 11


class AssignmentOutcome(str, Enum):
    PLACED = "placed"
    SWAPPED = "swapped"
    BENCHED = "benched"
    UNCHANGED = "unchanged"
    PLAYER_NOT_FOUND = "player_not_found"
    POSITION_NOT_FOUND = "position_not_found"


@dataclass(frozen=True)
class AssignmentResult:
    roster: Roster
    outcome: AssignmentOutcome

    @property
    def changed(self) -> bool:
        return self.outcome in (
            AssignmentOutcome.PLACED,
            AssignmentOutcome.SWAPPED,
            AssignmentOutcome.BENCHED,
        )


def _find(roster: Sequence[LineupPlayer], player_id: str) -> Optional[LineupPlayer]:
    for player in roster:
        if player.player_id == player_id:
            return player
    return None


def assign_checked(
    roster: Sequence[LineupPlayer],
    player_id: str,
    position: PositionRef,
) -> AssignmentResult:
    """Place a player on a position, swapping out any incumbent.

    The incumbent takes the slot the mover vacated. If the mover came from
    the bench that slot is empty, so the incumbent is benched and loses its
    starter flag; a pitch-to-pitch swap keeps both players as starters.
    """

    current = tuple(roster)
    code = parse_position(position)
    if code is None:
        return AssignmentResult(current, AssignmentOutcome.POSITION_NOT_FOUND)

    mover = _find(current, player_id)
    if mover is None:
        return AssignmentResult(current, AssignmentOutcome.PLAYER_NOT_FOUND)

    incumbent = player_at_position(current, code)
    if incumbent is not None and incumbent.player_id == mover.player_id and mover.is_starter:
        return AssignmentResult(current, AssignmentOutcome.UNCHANGED)

    vacated = mover.position
    swapped = incumbent is not None and incumbent.player_id != mover.player_id

    updated: list[LineupPlayer] = []
    for player in current:
        if player.player_id == mover.player_id:
            player = player.model_copy(update={"position": code, "is_starter": True})
        elif swapped and player.player_id == incumbent.player_id:
            changes: dict[str, object] = {"position": vacated}
            if vacated is None:
                changes["is_starter"] = False
            player = player.model_copy(update=changes)
        updated.append(player)

    outcome = AssignmentOutcome.SWAPPED if swapped else AssignmentOutcome.PLACED
    return AssignmentResult(tuple(updated), outcome)


def bench_checked(roster: Sequence[LineupPlayer], player_id: str) -> AssignmentResult:
    """Clear a player's position and starter flag."""

    current = tuple(roster)
    target = _find(current, player_id)
    if target is None:
        return AssignmentResult(current, AssignmentOutcome.PLAYER_NOT_FOUND)
    if target.position is None and not target.is_starter:
        return AssignmentResult(current, AssignmentOutcome.UNCHANGED)

    updated = tuple(
        player.model_copy(update={"position": None, "is_starter": False})
        if player.player_id == player_id
        else player
        for player in current
    )
    return AssignmentResult(updated, AssignmentOutcome.BENCHED)


def assign_to_position(roster: Sequence[LineupPlayer], player_id: str, position: PositionRef) -> Roster:
    return assign_checked(roster, player_id, position).roster


def move_to_bench(roster: Sequence[LineupPlayer], player_id: str) -> Roster:
    return bench_checked(roster, player_id).roster


def player_at_position(roster: Sequence[LineupPlayer], position: PositionRef) -> Optional[LineupPlayer]:
    code = parse_position(position)
    if code is None:
        return None
    for player in roster:
        if player.position == code:
            return player
    return None


def bench_players(roster: Sequence[LineupPlayer]) -> Roster:
    # Unplaced players and demoted players both show on the bench, even with a stale position.
    return tuple(player for player in roster if player.position is None or not player.is_starter)


def unpositioned_starters(roster: Sequence[LineupPlayer]) -> Roster:
    return tuple(player for player in roster if player.is_starter and player.position is None)


def reserves(roster: Sequence[LineupPlayer]) -> Roster:
    return tuple(player for player in roster if not player.is_starter)


def starters_count(roster: Sequence[LineupPlayer]) -> int:
    return sum(1 for player in roster if player.is_starter and player.position is not None)


__all__ = [
    "AssignmentOutcome",
    "AssignmentResult",
    "Roster",
    "STARTING_SLOTS",
    "assign_checked",
    "assign_to_position",
    "bench_checked",
    "bench_players",
    "move_to_bench",
    "player_at_position",
    "reserves",
    "starters_count",
    "unpositioned_starters",
]
