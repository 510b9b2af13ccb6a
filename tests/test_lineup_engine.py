import random

from pitchside.config import POSITION_CODES, PositionCode
from pitchside.lineup import (
    AssignmentOutcome,
    assign_checked,
    assign_to_position,
    bench_checked,
    bench_players,
    move_to_bench,
    player_at_position,
    project_lineup,
    reserves,
    starters_count,
    unpositioned_starters,
)
from pitchside.models import LineupPlayer


def _sample_roster() -> tuple[LineupPlayer, ...]:
    """Ten positioned starters, one unpositioned starter, two reserves."""

    placed = [
        LineupPlayer(
            player_id=f"p{index}",
            name=f"Player {index}",
            number=index,
            position=code,
            is_starter=True,
        )
        for index, code in enumerate(POSITION_CODES, start=1)
    ]
    return (
        *placed,
        LineupPlayer(player_id="p11", name="Player 11", number=11, is_starter=True),
        LineupPlayer(player_id="p12", name="Player 12", number=12),
        LineupPlayer(player_id="p13", name="Player 13", number=13),
    )


def _by_id(roster, player_id):
    return next(player for player in roster if player.player_id == player_id)


def test_swap_from_bench_benches_incumbent():
    roster = _sample_roster()
    keeper = player_at_position(roster, "gk")
    assert keeper is not None and keeper.player_id == "p10"

    updated = assign_to_position(roster, "p12", "gk")

    mover = _by_id(updated, "p12")
    assert mover.position is PositionCode.GK
    assert mover.is_starter is True
    displaced = _by_id(updated, "p10")
    assert displaced.position is None
    assert displaced.is_starter is False
    assert len(updated) == len(roster)


def test_pitch_to_pitch_swap_keeps_both_starters():
    roster = _sample_roster()
    result = assign_checked(roster, "p1", "cf")

    assert result.outcome is AssignmentOutcome.SWAPPED
    assert _by_id(result.roster, "p1").position is PositionCode.CF
    swapped = _by_id(result.roster, "p2")
    assert swapped.position is PositionCode.LW
    assert swapped.is_starter is True


def test_assign_to_empty_position_places_player():
    roster = move_to_bench(_sample_roster(), "p5")
    result = assign_checked(roster, "p11", "ch")

    assert result.outcome is AssignmentOutcome.PLACED
    assert _by_id(result.roster, "p11").position is PositionCode.CH
    assert starters_count(result.roster) == 10


def test_bench_player_leaves_other_positions_untouched():
    roster = _sample_roster()
    updated = move_to_bench(roster, "p5")

    benched = _by_id(updated, "p5")
    assert benched.position is None
    assert benched.is_starter is False
    assert player_at_position(updated, "ch") is None
    for before, after in zip(roster, updated):
        if before.player_id != "p5":
            assert before == after


def test_self_assignment_is_noop():
    roster = _sample_roster()
    result = assign_checked(roster, "p1", "lw")
    assert result.outcome is AssignmentOutcome.UNCHANGED
    assert result.roster == roster


def test_bench_is_idempotent():
    roster = _sample_roster()
    once = move_to_bench(roster, "p3")
    twice = move_to_bench(once, "p3")
    assert once == twice
    assert bench_checked(once, "p3").outcome is AssignmentOutcome.UNCHANGED


def test_unknown_ids_are_noops():
    roster = _sample_roster()
    assert assign_to_position(roster, "missing", "gk") == roster
    assert move_to_bench(roster, "missing") == roster
    assert assign_checked(roster, "missing", "gk").outcome is AssignmentOutcome.PLAYER_NOT_FOUND
    assert assign_checked(roster, "p12", "sweeper").outcome is AssignmentOutcome.POSITION_NOT_FOUND
    assert assign_to_position(roster, "p12", "sweeper") == roster
    assert player_at_position(roster, "sweeper") is None


def test_input_roster_is_not_mutated():
    roster = _sample_roster()
    snapshot = list(roster)
    assign_to_position(roster, "p12", "gk")
    move_to_bench(roster, "p1")
    assert list(roster) == snapshot


def test_random_moves_keep_single_occupancy_and_size():
    rng = random.Random(7)
    roster = _sample_roster()
    ids = [player.player_id for player in roster]
    for _ in range(300):
        if rng.random() < 0.8:
            roster = assign_to_position(roster, rng.choice(ids), rng.choice(POSITION_CODES))
        else:
            roster = move_to_bench(roster, rng.choice(ids))
        assert len(roster) == len(ids)
        assert sorted(player.player_id for player in roster) == sorted(ids)
        held = [player.position for player in roster if player.position is not None]
        assert len(held) == len(set(held))


def test_bench_partitions():
    roster = move_to_bench(_sample_roster(), "p4")

    assert [p.player_id for p in unpositioned_starters(roster)] == ["p11"]
    assert [p.player_id for p in reserves(roster)] == ["p4", "p12", "p13"]
    assert [p.player_id for p in bench_players(roster)] == ["p4", "p11", "p12", "p13"]


def test_bench_view_includes_demoted_player_with_stale_position():
    stale = LineupPlayer(player_id="s1", name="Stale", number=30, position="fb", is_starter=False)
    assert bench_players([stale]) == (stale,)
    assert starters_count([stale]) == 0


def test_starters_count_ignores_bench():
    roster = _sample_roster()
    roster = move_to_bench(roster, "p1")
    assert starters_count(roster) == 9
    assert len(reserves(roster)) == 3


def test_nine_placed_starters_and_two_reserves_count_nine():
    roster = tuple(
        LineupPlayer(player_id=f"s{index}", name=f"Starter {index}", number=index, position=code, is_starter=True)
        for index, code in enumerate(POSITION_CODES[:9], start=1)
    ) + (
        LineupPlayer(player_id="r1", name="Reserve 1", number=21),
        LineupPlayer(player_id="r2", name="Reserve 2", number=22),
    )

    assert unpositioned_starters(roster) == ()
    assert starters_count(roster) == 9
    view = project_lineup(roster)
    assert view.summary == "9/11"
    assert [p.player_id for p in view.reserves] == ["r1", "r2"]
    assert view.slots[-1].player is None
