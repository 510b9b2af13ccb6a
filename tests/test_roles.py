from pitchside.config import (
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


CLUBS = [
    ClubRef(club_id="c1", association_id="a1"),
    ClubRef(club_id="c2", association_id="a1"),
    ClubRef(club_id="c3", association_id="a2"),
]
TEAMS = [
    TeamRef(team_id="t1", club_id="c1"),
    TeamRef(team_id="t2", club_id="c2"),
    TeamRef(team_id="t3", club_id="c3"),
]


def test_association_admin_expands_to_clubs_and_teams():
    scope = resolve_admin_scope([ScopedRole(Role.ASSOCIATION_ADMIN, association_id="a1")], CLUBS, TEAMS)
    assert scope.club_ids == {"c1", "c2"}
    assert scope.team_ids == {"t1", "t2"}
    assert scope.can_manage_association("a1")
    assert not scope.can_manage_team("t3")


def test_club_admin_and_coach_scopes():
    scope = resolve_admin_scope(
        [ScopedRole(Role.CLUB_ADMIN, club_id="c3"), ScopedRole(Role.COACH, team_id="t1")],
        CLUBS,
        TEAMS,
    )
    assert scope.club_ids == {"c3"}
    assert scope.team_ids == {"t1", "t3"}
    assert scope.highest_role is Role.CLUB_ADMIN
    assert scope.is_any_admin


def test_super_admin_manages_everything_without_expansion():
    scope = resolve_admin_scope([ScopedRole(Role.SUPER_ADMIN)], CLUBS, TEAMS)
    assert scope.team_ids == frozenset()
    assert scope.can_manage_team("anything")
    assert scope.is_super_admin


def test_player_has_no_admin_scope():
    scope = resolve_admin_scope([ScopedRole(Role.PLAYER, team_id="t1")], CLUBS, TEAMS)
    assert not scope.is_any_admin
    assert capabilities_for(scope, "t1") == ViewerCapabilities(can_edit_lineup=False)


def test_coach_capabilities_gate_lineup_editing():
    scope = resolve_admin_scope([ScopedRole(Role.COACH, team_id="t2")], CLUBS, TEAMS)
    assert capabilities_for(scope, "t2").can_edit_lineup
    assert not capabilities_for(scope, "t1").can_edit_lineup
    assert ViewerCapabilities.for_role(Role.COACH).can_edit_lineup
    assert not ViewerCapabilities.for_role(Role.PLAYER).can_edit_lineup


def test_role_parsing_and_hierarchy():
    assert parse_role("coach") is Role.COACH
    assert parse_role("team-manager") is Role.TEAM_MANAGER
    assert parse_role("groundskeeper") is Role.PLAYER
    assert parse_role(None, default=Role.COACH) is Role.COACH
    assert highest_role([Role.PLAYER, Role.TEAM_MANAGER]) is Role.TEAM_MANAGER
    assert highest_role([]) is None
