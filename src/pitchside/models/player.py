"""Canonical per-fixture player record shared by the engine, ingest and API layers."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from pitchside.config.positions import PositionCode, parse_position


class LineupPlayer(BaseModel):
    """One roster entry for a fixture's lineup."""

    player_id: str = Field(..., min_length=1)
    name: str
    number: int = Field(..., ge=0)
    position: Optional[PositionCode] = None
    is_starter: bool = False
    preferred_position: Optional[PositionCode] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("position", mode="before")
    @classmethod
    def _coerce_position(cls, value: Any) -> Optional[PositionCode]:
        if value is None or value == "" or isinstance(value, PositionCode):
            return value or None
        code = parse_position(str(value))
        if code is None:
            raise ValueError(f"unknown pitch position {value!r}")
        return code

    @field_validator("preferred_position", mode="before")
    @classmethod
    def _coerce_preferred(cls, value: Any) -> Optional[PositionCode]:
        # Free text such as "Centre Forward" maps onto the catalog; anything else is dropped.
        if value is None or isinstance(value, PositionCode):
            return value
        return parse_position(str(value))

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    @property
    def short_name(self) -> str:
        parts = self.name.split()
        return parts[-1] if parts else self.name
