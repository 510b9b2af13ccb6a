"""Drag-and-drop state for moving players between the pitch and the bench.

The controller only knows three verbs: ``begin_drag``, ``drop`` and
``cancel_drag``. Pointer and touch event streams are translated into those
verbs by thin adapters so the same rules run on either input backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from pitchside.config.positions import PositionCode, parse_position
from pitchside.config.roles import ViewerCapabilities
from pitchside.models import LineupPlayer

from .engine import Roster, assign_to_position, move_to_bench


logger = logging.getLogger(__name__)


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class _Bench:
    def __repr__(self) -> str:
        return "BENCH"


BENCH = _Bench()

DropTarget = Union[PositionCode, _Bench]


@dataclass(frozen=True)
class DragItem:
    player_id: str
    source_position: Optional[PositionCode]


def resolve_target(value: Any) -> Optional[DropTarget]:
    if value is BENCH:
        return BENCH
    if isinstance(value, str) and value.strip().lower() == "bench":
        return BENCH
    return parse_position(value)


class DragController:
    """Tracks one drag gesture at a time over a roster."""

    def __init__(self, roster: Sequence[LineupPlayer], capabilities: ViewerCapabilities):
        self.roster: Roster = tuple(roster)
        self.capabilities = capabilities
        self.item: Optional[DragItem] = None

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self.item is not None else DragState.IDLE

    @property
    def can_edit(self) -> bool:
        return self.capabilities.can_edit_lineup

    def begin_drag(self, player_id: str) -> bool:
        """Start dragging a player chip; refused for read-only viewers or unknown players."""

        if not self.can_edit or self.item is not None:
            return False
        for player in self.roster:
            if player.player_id == player_id:
                self.item = DragItem(player_id=player_id, source_position=player.position)
                return True
        return False

    def is_armed(self, target: Any) -> bool:
        return self.can_edit and self.item is not None and resolve_target(target) is not None

    def drop(self, target: Any) -> Roster:
        """Finish the drag on a target and return the resulting roster."""

        item = self.item
        self.item = None
        resolved = resolve_target(target)
        if item is None or not self.can_edit or resolved is None:
            return self.roster
        if resolved is BENCH:
            self.roster = move_to_bench(self.roster, item.player_id)
        else:
            self.roster = assign_to_position(self.roster, item.player_id, resolved)
        logger.debug("Dropped player %s on %r", item.player_id, resolved)
        return self.roster

    def cancel_drag(self) -> None:
        self.item = None


class PointerAdapter:
    """Maps HTML5-style drag events onto the controller."""

    def __init__(self, controller: DragController):
        self.controller = controller

    def handle(self, event: Mapping[str, Any]) -> Roster:
        kind = event.get("type")
        if kind == "dragstart":
            self.controller.begin_drag(str(event.get("player_id", "")))
        elif kind == "drop":
            return self.controller.drop(event.get("target"))
        elif kind == "dragend":
            self.controller.cancel_drag()
        return self.controller.roster


class TouchAdapter:
    """Maps touch events onto the controller; a touch released off any target cancels."""

    def __init__(self, controller: DragController):
        self.controller = controller

    def handle(self, event: Mapping[str, Any]) -> Roster:
        kind = event.get("type")
        if kind == "touchstart":
            self.controller.begin_drag(str(event.get("player_id", "")))
        elif kind == "touchend":
            target = event.get("target")
            if target is None:
                self.controller.cancel_drag()
            else:
                return self.controller.drop(target)
        elif kind == "touchcancel":
            self.controller.cancel_drag()
        return self.controller.roster


def adapter_for(controller: DragController, *, is_touch: bool) -> Union[PointerAdapter, TouchAdapter]:
    return TouchAdapter(controller) if is_touch else PointerAdapter(controller)


__all__ = [
    "BENCH",
    "DragController",
    "DragItem",
    "DragState",
    "DropTarget",
    "PointerAdapter",
    "TouchAdapter",
    "adapter_for",
    "resolve_target",
]
