"""Viewer roles, admin scope resolution and the capabilities derived from them."""

from __future__ import annotations

import os
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence, Tuple


logger = logging.getLogger(__name__)

_DEFAULT_ROLE_ENV = "PITCHSIDE_DEFAULT_ROLE"


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ASSOCIATION_ADMIN = "ASSOCIATION_ADMIN"
    CLUB_ADMIN = "CLUB_ADMIN"
    TEAM_MANAGER = "TEAM_MANAGER"
    COACH = "COACH"
    PLAYER = "PLAYER"


# Highest to lowest.
ROLE_HIERARCHY: Tuple[Role, ...] = (
    Role.SUPER_ADMIN,
    Role.ASSOCIATION_ADMIN,
    Role.CLUB_ADMIN,
    Role.TEAM_MANAGER,
    Role.COACH,
    Role.PLAYER,
)

ADMIN_ROLES = frozenset(
    {Role.SUPER_ADMIN, Role.ASSOCIATION_ADMIN, Role.CLUB_ADMIN, Role.TEAM_MANAGER, Role.COACH}
)

# Roles that may rearrange a lineup for a team they manage.
LINEUP_EDITOR_ROLES = ADMIN_ROLES

_DISPLAY_NAMES: Mapping[Role, str] = {
    Role.PLAYER: "Player",
    Role.COACH: "Coach",
    Role.TEAM_MANAGER: "Team Manager",
    Role.CLUB_ADMIN: "Club Admin",
    Role.ASSOCIATION_ADMIN: "Association Admin",
    Role.SUPER_ADMIN: "Super Admin",
}


def parse_role(value: str | Role | None, *, default: Role = Role.PLAYER) -> Role:
    """Parse a role name such as ``"coach"`` or ``"TEAM_MANAGER"``.

    Unknown or empty values fall back to ``default``.
    """

    if isinstance(value, Role):
        return value
    if not value:
        return default
    token = value.strip().upper().replace(" ", "_").replace("-", "_")
    try:
        return Role(token)
    except ValueError:
        logger.warning("Unknown viewer role %r; using %s", value, default.value)
        return default


def default_role() -> Role:
    return parse_role(os.getenv(_DEFAULT_ROLE_ENV), default=Role.PLAYER)


def display_name(role: Role) -> str:
    return _DISPLAY_NAMES[role]


def highest_role(roles: Iterable[Role]) -> Optional[Role]:
    held = set(roles)
    for role in ROLE_HIERARCHY:
        if role in held:
            return role
    return None


@dataclass(frozen=True)
class ScopedRole:
    role: Role
    association_id: Optional[str] = None
    club_id: Optional[str] = None
    team_id: Optional[str] = None


@dataclass(frozen=True)
class ClubRef:
    club_id: str
    association_id: str


@dataclass(frozen=True)
class TeamRef:
    team_id: str
    club_id: str


@dataclass(frozen=True)
class AdminScope:
    """Resolved set of associations, clubs and teams a viewer may manage."""

    scoped_roles: Tuple[ScopedRole, ...]
    association_ids: frozenset[str]
    club_ids: frozenset[str]
    team_ids: frozenset[str]

    @property
    def is_super_admin(self) -> bool:
        return any(scoped.role is Role.SUPER_ADMIN for scoped in self.scoped_roles)

    @property
    def is_any_admin(self) -> bool:
        return any(scoped.role in ADMIN_ROLES for scoped in self.scoped_roles)

    @property
    def highest_role(self) -> Optional[Role]:
        return highest_role(scoped.role for scoped in self.scoped_roles)

    def can_manage_association(self, association_id: str) -> bool:
        return self.is_super_admin or association_id in self.association_ids

    def can_manage_club(self, club_id: str) -> bool:
        return self.is_super_admin or club_id in self.club_ids

    def can_manage_team(self, team_id: str) -> bool:
        return self.is_super_admin or team_id in self.team_ids


def resolve_admin_scope(
    scoped_roles: Sequence[ScopedRole],
    clubs: Sequence[ClubRef],
    teams: Sequence[TeamRef],
) -> AdminScope:
    """Expand scoped role grants down the association > club > team hierarchy.

    Super admins are not expanded; callers check ``is_super_admin`` instead.
    """

    roles = tuple(scoped_roles)
    association_ids: set[str] = set()
    club_ids: set[str] = set()
    team_ids: set[str] = set()

    if not any(scoped.role is Role.SUPER_ADMIN for scoped in roles):
        club_association = {club.club_id: club.association_id for club in clubs}
        for scoped in roles:
            if scoped.role is Role.ASSOCIATION_ADMIN and scoped.association_id:
                association_ids.add(scoped.association_id)
                club_ids.update(
                    club.club_id for club in clubs if club.association_id == scoped.association_id
                )
                team_ids.update(
                    team.team_id
                    for team in teams
                    if club_association.get(team.club_id) == scoped.association_id
                )
            elif scoped.role is Role.CLUB_ADMIN and scoped.club_id:
                club_ids.add(scoped.club_id)
                team_ids.update(team.team_id for team in teams if team.club_id == scoped.club_id)
            elif scoped.role in (Role.TEAM_MANAGER, Role.COACH) and scoped.team_id:
                team_ids.add(scoped.team_id)

    return AdminScope(
        scoped_roles=roles,
        association_ids=frozenset(association_ids),
        club_ids=frozenset(club_ids),
        team_ids=frozenset(team_ids),
    )


@dataclass(frozen=True)
class ViewerCapabilities:
    """Actions available to the current viewer, passed explicitly to editors."""

    can_edit_lineup: bool = False

    @classmethod
    def for_role(cls, role: Role) -> "ViewerCapabilities":
        return cls(can_edit_lineup=role in LINEUP_EDITOR_ROLES)


def capabilities_for(scope: AdminScope, team_id: str) -> ViewerCapabilities:
    """Lineup editing is granted to anyone who manages the fixture's team."""

    return ViewerCapabilities(can_edit_lineup=scope.can_manage_team(team_id))
