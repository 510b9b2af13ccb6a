"""Pydantic models for API I/O."""

from .lineup import (
    AssignmentResponse,
    AssignRequest,
    BenchRequest,
    CandidatesResponse,
    LineupViewResponse,
    PitchSlotResponse,
    PlayerResponse,
    PositionResponse,
    RosterLoadResponse,
    RosterPlayerPayload,
    RosterRequest,
    RosterResponse,
)

__all__ = [
    "AssignmentResponse",
    "AssignRequest",
    "BenchRequest",
    "CandidatesResponse",
    "LineupViewResponse",
    "PitchSlotResponse",
    "PlayerResponse",
    "PositionResponse",
    "RosterLoadResponse",
    "RosterPlayerPayload",
    "RosterRequest",
    "RosterResponse",
]
