"""Static pitch position catalog for the lineup editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple, Union


class PositionCode(str, Enum):
    LW = "lw"
    CF = "cf"
    RW = "rw"
    LI = "li"
    CH = "ch"
    RI = "ri"
    LH = "lh"
    FB = "fb"
    RH = "rh"
    GK = "gk"


class Zone(str, Enum):
    ATTACK = "attack"
    MIDFIELD = "midfield"
    DEFENSE = "defense"
    GOALKEEPER = "goalkeeper"


@dataclass(frozen=True)
class Position:
    code: Optional[PositionCode]
    label: str
    name: str
    x: float
    y: float
    zone: Optional[Zone]

    @property
    def coordinates(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def is_known(self) -> bool:
        return self.code is not None


UNKNOWN_POSITION = Position(code=None, label="?", name="Unknown position", x=0.0, y=0.0, zone=None)

# Catalog order is pitch order: attack line, midfield line, defense line, keeper.
_POSITIONS: Dict[PositionCode, Position] = {
    position.code: position
    for position in (
        Position(PositionCode.LW, "LW", "Left Wing", 20.0, 15.0, Zone.ATTACK),
        Position(PositionCode.CF, "CF", "Centre Forward", 50.0, 12.0, Zone.ATTACK),
        Position(PositionCode.RW, "RW", "Right Wing", 80.0, 15.0, Zone.ATTACK),
        Position(PositionCode.LI, "LI", "Left Inside", 25.0, 35.0, Zone.MIDFIELD),
        Position(PositionCode.CH, "CH", "Centre Half", 50.0, 32.0, Zone.MIDFIELD),
        Position(PositionCode.RI, "RI", "Right Inside", 75.0, 35.0, Zone.MIDFIELD),
        Position(PositionCode.LH, "LH", "Left Half", 25.0, 58.0, Zone.DEFENSE),
        Position(PositionCode.FB, "FB", "Fullback", 50.0, 62.0, Zone.DEFENSE),
        Position(PositionCode.RH, "RH", "Right Half", 75.0, 58.0, Zone.DEFENSE),
        Position(PositionCode.GK, "GK", "Goalkeeper", 50.0, 85.0, Zone.GOALKEEPER),
    )
}


def _alias_token(value: str) -> str:
    return " ".join(value.strip().lower().replace("-", " ").split())


def _build_alias_lookup() -> Dict[str, PositionCode]:
    lookup: Dict[str, PositionCode] = {}
    for code, position in _POSITIONS.items():
        for alias in (code.value, position.label, position.name):
            lookup.setdefault(_alias_token(alias), code)
    return lookup


_ALIAS_LOOKUP = _build_alias_lookup()

PositionRef = Union[PositionCode, Position, str]


def iter_positions() -> Iterable[Position]:
    """Return the ten catalog positions in pitch order."""

    return _POSITIONS.values()


def parse_position(value: Optional[PositionRef]) -> Optional[PositionCode]:
    """Resolve a code, a short label or a human name to a position code.

    Matching ignores case and surrounding whitespace, so ``"gk"``, ``"GK"``
    and ``"Goalkeeper"`` all resolve to ``PositionCode.GK``. Anything that
    does not name a catalog position resolves to ``None``.
    """

    if value is None:
        return None
    if isinstance(value, PositionCode):
        return value
    if isinstance(value, Position):
        return value.code
    if not isinstance(value, str):
        return None
    return _ALIAS_LOOKUP.get(_alias_token(value))


def lookup_position(value: Optional[PositionRef]) -> Position:
    """Total lookup: unknown references return ``UNKNOWN_POSITION``."""

    code = parse_position(value)
    if code is None:
        return UNKNOWN_POSITION
    return _POSITIONS[code]


def get_position(value: PositionRef) -> Position:
    """Fetch a catalog position, raising KeyError if it is not one of the ten."""

    code = parse_position(value)
    if code is None:
        raise KeyError(f"No pitch position configured for {value!r}")
    return _POSITIONS[code]


def label(value: Optional[PositionRef]) -> str:
    return lookup_position(value).label


def full_name(value: Optional[PositionRef]) -> str:
    return lookup_position(value).name


def coordinates(value: Optional[PositionRef]) -> Tuple[float, float]:
    return lookup_position(value).coordinates


POSITION_CODES: Tuple[PositionCode, ...] = tuple(_POSITIONS)

