"""Command-line interface for arranging a fixture lineup from a roster file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from pitchside.config.positions import get_position, label
from pitchside.config.roles import ViewerCapabilities, parse_role
from pitchside.config_loader import MappingProfile
from pitchside.ingest import demo_roster, load_roster
from pitchside.lineup import LineupSession, export_lineup_to_csv
from pitchside.models import LineupPlayer


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Arrange a hockey lineup from a roster file")
    parser.add_argument("roster", type=Path, nargs="?", help="Path to roster CSV or JSON")
    parser.add_argument("--demo", action="store_true", help="Use the built-in demo roster")
    parser.add_argument("--format", choices=("csv", "json"), default=None, help="Roster file format")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--role", default="COACH", help="Viewer role (e.g., COACH, PLAYER)")
    parser.add_argument(
        "--assign",
        action="append",
        default=[],
        metavar="PLAYER=POS",
        help="Place a player on a position (repeatable, applied in order)",
    )
    parser.add_argument(
        "--bench",
        action="append",
        default=[],
        metavar="PLAYER",
        help="Move a player to the bench (applied after assignments)",
    )
    parser.add_argument("--candidates", metavar="POS", help="List candidates for a position", default=None)
    parser.add_argument("--query", default="", help="Name or number filter for --candidates")
    parser.add_argument("--output", type=Path, default=None, help="Write the lineup CSV here")
    parser.add_argument("--verbose", action="store_true", help="Log normalization details")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _player_line(player: LineupPlayer) -> str:
    preferred = f" ({label(player.preferred_position)})" if player.preferred_position else ""
    return f"#{player.number:<3} {player.name}{preferred}"


def _print_lineup(session: LineupSession) -> None:
    view = session.view()
    print(f"Fixture {session.fixture_id}: {view.summary} starters")
    for slot in view.slots:
        occupant = _player_line(slot.player) if slot.player else "-"
        print(f"  {slot.position.label:<3} {occupant}")
    if view.unpositioned_starters:
        print("Unpositioned starters:")
        for player in view.unpositioned_starters:
            print(f"  {_player_line(player)}")
    print("Bench / reserves:")
    if view.reserves:
        for player in view.reserves:
            print(f"  {_player_line(player)}")
    else:
        print("  No reserves")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    mapping = _parse_mapping(args.column)
    if args.load_profile:
        profile = MappingProfile.load(args.load_profile)
        mapping = profile.roster_mapping | mapping

    if args.demo:
        roster = demo_roster()
        fixture_id = "demo"
    elif args.roster is not None:
        roster, report = load_roster(args.roster, mapping=mapping or None, fmt=args.format)
        fixture_id = args.roster.stem
        print(f"Loaded {report.loaded_players}/{report.total_rows} players")
        if report.corrections:
            print(f"Applied {report.corrections} roster correction(s)")
    else:
        raise SystemExit("a roster file is required unless using --demo")

    if args.save_profile:
        MappingProfile(mapping).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    capabilities = ViewerCapabilities.for_role(parse_role(args.role))
    session = LineupSession(fixture_id, roster, capabilities)

    if (args.assign or args.bench) and not capabilities.can_edit_lineup:
        raise SystemExit(f"role {args.role} cannot edit the lineup")

    for entry in args.assign:
        if "=" not in entry:
            raise SystemExit(f"Invalid assignment '{entry}', expected PLAYER=POS")
        player_id, position_ref = (part.strip() for part in entry.split("=", 1))
        try:
            position = get_position(position_ref)
        except KeyError as exc:
            raise SystemExit(str(exc)) from exc
        result = session.assign(player_id, position)
        print(f"{player_id} -> {position.label}: {result.outcome.value}")

    for player_id in args.bench:
        result = session.bench(player_id.strip())
        print(f"{player_id} -> bench: {result.outcome.value}")

    _print_lineup(session)

    if args.candidates:
        try:
            target = get_position(args.candidates)
        except KeyError as exc:
            raise SystemExit(str(exc)) from exc
        groups = session.candidates(target, args.query)
        print(f"Candidates for {target.name}:")
        message = groups.empty_message(args.query)
        if message:
            print(f"  {message}")
        for player in groups.recommended:
            print(f"  * {_player_line(player)}")
        for player in groups.others:
            print(f"    {_player_line(player)}")

    if args.output:
        args.output.write_text(export_lineup_to_csv(session.roster), encoding="utf-8")
        print(f"Wrote lineup to {args.output}")


if __name__ == "__main__":
    main()
