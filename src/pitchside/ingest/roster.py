"""Helpers to load roster files and emit normalized lineup players."""

from __future__ import annotations

import csv
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from pitchside.config.positions import PositionCode, parse_position
from pitchside.models import LineupPlayer


logger = logging.getLogger(__name__)


DEFAULT_ROSTER_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "number": "number",
    "position": "position",
    "starter": "starter",
    "preferred_position": "preferred_position",
}


class RosterRow(BaseModel):
    raw_id: str
    raw_name: str
    raw_number: str
    raw_position: Optional[str] = None
    raw_starter: Optional[str] = None
    raw_preferred: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = row.get(spec)
                if value is None:
                    return default
                return str(value).strip()
            parts = [str(row.get(col, "")).strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key, DEFAULT_ROSTER_MAPPING.get(key))
            if isinstance(spec, str) and "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_id=extract(parse_spec("player_id"), default="") or "",
            raw_name=extract(parse_spec("name"), default="") or "",
            raw_number=extract(parse_spec("number"), default="0") or "0",
            raw_position=extract(parse_spec("position")),
            raw_starter=extract(parse_spec("starter")),
            raw_preferred=extract(parse_spec("preferred_position")),
        )


@dataclass
class RosterLoadReport:
    total_rows: int = 0
    loaded_players: int = 0
    cleared_unknown_positions: List[str] = field(default_factory=list)
    promoted_to_starter: List[str] = field(default_factory=list)
    displaced_from_position: List[str] = field(default_factory=list)
    duplicate_player_ids: List[str] = field(default_factory=list)

    @property
    def corrections(self) -> int:
        return (
            len(self.cleared_unknown_positions)
            + len(self.promoted_to_starter)
            + len(self.displaced_from_position)
            + len(self.duplicate_player_ids)
        )

    def as_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "loaded_players": self.loaded_players,
            "cleared_unknown_positions": list(self.cleared_unknown_positions),
            "promoted_to_starter": list(self.promoted_to_starter),
            "displaced_from_position": list(self.displaced_from_position),
            "duplicate_player_ids": list(self.duplicate_player_ids),
        }


_NUMBER_PATTERN = re.compile(r"^#?(\d+)$")


def _parse_number(raw_number: str) -> int:
    match = _NUMBER_PATTERN.match(raw_number.strip())
    if match is None:
        raise ValueError(f"shirt number '{raw_number}' is not a whole non-negative number")
    return int(match.group(1))


def _parse_flag(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "t", "yes", "y", "starter", "starting"}:
        return True
    if text in {"0", "false", "f", "no", "n", "bench", "reserve"}:
        return False
    return None


def rows_to_roster(rows: Sequence[RosterRow]) -> Tuple[Tuple[LineupPlayer, ...], RosterLoadReport]:
    """Build a roster, normalizing inconsistent lineup state on the way in.

    Any player holding a position is a starter, at most one player keeps a
    given position (later claimants become unpositioned starters), unknown
    position codes are cleared and repeated player ids are dropped.
    """

    report = RosterLoadReport(total_rows=len(rows))
    players: List[LineupPlayer] = []
    seen_ids: set[str] = set()
    occupied: set[PositionCode] = set()

    for row in rows:
        player_id = row.raw_id or row.raw_name
        if not player_id:
            raise ValueError("roster row is missing both player id and name")
        if player_id in seen_ids:
            logger.warning("Dropping duplicate roster entry for player %s", player_id)
            report.duplicate_player_ids.append(player_id)
            continue
        seen_ids.add(player_id)

        position: Optional[PositionCode] = None
        if row.raw_position:
            position = parse_position(row.raw_position)
            if position is None:
                logger.warning("Clearing unknown position %r for player %s", row.raw_position, player_id)
                report.cleared_unknown_positions.append(player_id)

        starter = bool(_parse_flag(row.raw_starter))
        if position is not None:
            if position in occupied:
                logger.warning(
                    "Position %s already taken; player %s loaded as unpositioned starter",
                    position.value,
                    player_id,
                )
                report.displaced_from_position.append(player_id)
                position = None
                starter = True
            else:
                occupied.add(position)
                if not starter:
                    report.promoted_to_starter.append(player_id)
                    starter = True

        players.append(
            LineupPlayer(
                player_id=player_id,
                name=row.raw_name,
                number=_parse_number(row.raw_number),
                position=position,
                is_starter=starter,
                preferred_position=row.raw_preferred or None,
            )
        )

    report.loaded_players = len(players)
    if report.corrections:
        logger.info("Normalized roster with %d correction(s)", report.corrections)
    return tuple(players), report


def normalize_roster(
    players: Sequence[LineupPlayer],
) -> Tuple[Tuple[LineupPlayer, ...], RosterLoadReport]:
    """Apply the load-time rules of ``rows_to_roster`` to already-built players."""

    rows = [
        RosterRow(
            raw_id=player.player_id,
            raw_name=player.name,
            raw_number=str(player.number),
            raw_position=player.position.value if player.position else None,
            raw_starter="true" if player.is_starter else "false",
            raw_preferred=player.preferred_position.value if player.preferred_position else None,
        )
        for player in players
    ]
    return rows_to_roster(rows)


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]
    return rows


def load_roster_json(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    """Load a JSON list of player objects (or ``{"players": [...]}``)."""

    mapping = mapping or DEFAULT_ROSTER_MAPPING
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("players", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of players")
    return [RosterRow.from_mapping(entry, mapping) for entry in data]


def load_roster(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
    fmt: str | None = None,
) -> Tuple[Tuple[LineupPlayer, ...], RosterLoadReport]:
    kind = (fmt or path.suffix.lstrip(".") or "csv").lower()
    if kind == "json":
        rows = load_roster_json(path, mapping=mapping)
    elif kind == "csv":
        rows = load_roster_csv(path, mapping=mapping)
    else:
        raise ValueError(f"Unsupported roster format {kind!r}; expected csv or json")
    return rows_to_roster(rows)


_DEMO_PLAYERS: Tuple[Tuple[str, str, int, Optional[str], bool, str], ...] = (
    ("1", "James Wilson", 7, "cf", True, "Centre Forward"),
    ("2", "Sarah Chen", 1, "gk", True, "Goalkeeper"),
    ("3", "Marcus Lee", 11, "lw", True, "Left Wing"),
    ("4", "Emily Brown", 6, "ch", True, "Centre Half"),
    ("5", "David Singh", 4, "rh", True, "Right Half"),
    ("6", "Olivia Taylor", 3, "fb", True, "Fullback"),
    ("7", "Tom Mitchell", 9, "rw", True, "Right Wing"),
    ("8", "Lucy Walker", 8, "li", True, "Left Inside"),
    ("9", "Ryan James", 5, "ri", True, "Right Inside"),
    ("10", "Sophie Adams", 2, "lh", True, "Left Half"),
    ("11", "Chris Evans", 10, None, True, "Centre Forward"),
    ("12", "Mia Johnson", 14, None, False, "Left Wing"),
    ("13", "Jake Williams", 15, None, False, "Fullback"),
)


def demo_roster() -> Tuple[LineupPlayer, ...]:
    """Thirteen-player seed used when a fixture has no saved lineup yet."""

    return tuple(
        LineupPlayer(
            player_id=player_id,
            name=name,
            number=number,
            position=position,
            is_starter=starter,
            preferred_position=preferred,
        )
        for player_id, name, number, position, starter, preferred in _DEMO_PLAYERS
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
