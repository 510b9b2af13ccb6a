"""Editing session wrapping one fixture's lineup between load and save."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from pitchside.config.positions import PositionRef
from pitchside.config.roles import ViewerCapabilities
from pitchside.models import LineupPlayer

from .engine import AssignmentResult, Roster, assign_checked, bench_checked
from .selection import CandidateGroups, filter_candidates
from .view import LineupView, project_lineup


logger = logging.getLogger(__name__)


class LineupSink(Protocol):
    def save_lineup(self, fixture_id: str, roster: Sequence[LineupPlayer]) -> None:
        ...


class LineupSession:
    """Working copy of a fixture lineup plus the snapshot it was loaded from."""

    def __init__(
        self,
        fixture_id: str,
        roster: Sequence[LineupPlayer],
        capabilities: ViewerCapabilities,
    ):
        self.fixture_id = fixture_id
        self.capabilities = capabilities
        self._snapshot: Roster = tuple(roster)
        self.roster: Roster = self._snapshot
        self.has_changes = False

    @property
    def snapshot(self) -> Roster:
        return self._snapshot

    def _require_edit(self) -> None:
        if not self.capabilities.can_edit_lineup:
            raise PermissionError(f"Viewer cannot edit the lineup for fixture {self.fixture_id}")

    def _apply(self, result: AssignmentResult) -> AssignmentResult:
        if result.changed:
            self.roster = result.roster
            self.has_changes = True
        return result

    def assign(self, player_id: str, position: PositionRef) -> AssignmentResult:
        self._require_edit()
        return self._apply(assign_checked(self.roster, player_id, position))

    def bench(self, player_id: str) -> AssignmentResult:
        self._require_edit()
        return self._apply(bench_checked(self.roster, player_id))

    def reset(self) -> Roster:
        """Discard unsaved edits and return to the last loaded or saved roster."""

        self._require_edit()
        self.roster = self._snapshot
        self.has_changes = False
        logger.info("Discarded lineup changes for fixture %s", self.fixture_id)
        return self.roster

    def save(self, store: LineupSink) -> Roster:
        """Persist the working roster; on failure the working roster is kept for a retry."""

        self._require_edit()
        try:
            store.save_lineup(self.fixture_id, self.roster)
        except Exception:
            logger.warning("Saving lineup for fixture %s failed; keeping unsaved edits", self.fixture_id)
            raise
        self._snapshot = self.roster
        self.has_changes = False
        logger.info("Saved lineup for fixture %s (%d players)", self.fixture_id, len(self.roster))
        return self.roster

    def view(self) -> LineupView:
        return project_lineup(self.roster)

    def candidates(self, position: PositionRef, query: Optional[str] = None) -> CandidateGroups:
        return filter_candidates(self.roster, query, position)


__all__ = ["LineupSession", "LineupSink"]
