"""Configuration helpers for the pitch catalog and viewer roles."""

from .positions import (
    POSITION_CODES,
    UNKNOWN_POSITION,
    Position,
    PositionCode,
    Zone,
    coordinates,
    full_name,
    get_position,
    iter_positions,
    label,
    lookup_position,
    parse_position,
)
from .roles import (
    AdminScope,
    ClubRef,
    Role,
    ScopedRole,
    TeamRef,
    ViewerCapabilities,
    capabilities_for,
    highest_role,
    parse_role,
    resolve_admin_scope,
)

__all__ = [
    "POSITION_CODES",
    "UNKNOWN_POSITION",
    "Position",
    "PositionCode",
    "Zone",
    "coordinates",
    "full_name",
    "get_position",
    "iter_positions",
    "label",
    "lookup_position",
    "parse_position",
    "AdminScope",
    "ClubRef",
    "Role",
    "ScopedRole",
    "TeamRef",
    "ViewerCapabilities",
    "capabilities_for",
    "highest_role",
    "parse_role",
    "resolve_admin_scope",
]
