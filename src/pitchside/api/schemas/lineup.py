from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from pitchside.config.positions import Position
from pitchside.lineup.view import LineupView
from pitchside.models import LineupPlayer


class PositionResponse(BaseModel):
    code: str
    label: str
    name: str
    x: float
    y: float
    zone: str

    @classmethod
    def from_position(cls, position: Position) -> "PositionResponse":
        return cls(
            code=position.code.value if position.code else "",
            label=position.label,
            name=position.name,
            x=position.x,
            y=position.y,
            zone=position.zone.value if position.zone else "",
        )


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    number: int
    position: str | None
    is_starter: bool
    preferred_position: str | None

    @classmethod
    def from_player(cls, player: LineupPlayer) -> "PlayerResponse":
        return cls(
            player_id=player.player_id,
            name=player.name,
            number=player.number,
            position=player.position.value if player.position else None,
            is_starter=player.is_starter,
            preferred_position=player.preferred_position.value if player.preferred_position else None,
        )


class PitchSlotResponse(BaseModel):
    position: PositionResponse
    player: PlayerResponse | None


class LineupViewResponse(BaseModel):
    fixture_id: str
    can_edit: bool
    has_changes: bool
    starters_count: int
    target: int
    slots: List[PitchSlotResponse]
    unpositioned_starters: List[PlayerResponse]
    reserves: List[PlayerResponse]
    bench: List[PlayerResponse]

    @classmethod
    def from_view(
        cls,
        view: LineupView,
        *,
        fixture_id: str,
        can_edit: bool,
        has_changes: bool,
    ) -> "LineupViewResponse":
        return cls(
            fixture_id=fixture_id,
            can_edit=can_edit,
            has_changes=has_changes,
            starters_count=view.starters_count,
            target=view.target,
            slots=[
                PitchSlotResponse(
                    position=PositionResponse.from_position(slot.position),
                    player=PlayerResponse.from_player(slot.player) if slot.player else None,
                )
                for slot in view.slots
            ],
            unpositioned_starters=[PlayerResponse.from_player(p) for p in view.unpositioned_starters],
            reserves=[PlayerResponse.from_player(p) for p in view.reserves],
            bench=[PlayerResponse.from_player(p) for p in view.bench],
        )


class RosterPlayerPayload(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: str
    number: int = Field(..., ge=0)
    position: str | None = None
    is_starter: bool = False
    preferred_position: str | None = None


class RosterRequest(BaseModel):
    players: List[RosterPlayerPayload] = Field(default_factory=list)
    use_demo: bool = False


class RosterLoadResponse(BaseModel):
    total_rows: int
    loaded_players: int
    cleared_unknown_positions: List[str]
    promoted_to_starter: List[str]
    displaced_from_position: List[str]
    duplicate_player_ids: List[str]


class RosterResponse(BaseModel):
    lineup: LineupViewResponse
    report: RosterLoadResponse


class AssignRequest(BaseModel):
    player_id: str
    position: str


class BenchRequest(BaseModel):
    player_id: str


class AssignmentResponse(BaseModel):
    outcome: Literal[
        "placed",
        "swapped",
        "benched",
        "unchanged",
        "player_not_found",
        "position_not_found",
    ]
    lineup: LineupViewResponse


class CandidatesResponse(BaseModel):
    position: PositionResponse
    query: str
    recommended: List[PlayerResponse]
    others: List[PlayerResponse]
    message: str | None = None
