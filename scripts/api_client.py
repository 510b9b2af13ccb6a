"""Lightweight REST client for the pitchside API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pitchside REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("fixture_id", help="Fixture to work on")
    parser.add_argument("--role", default="COACH", help="Viewer role sent in X-Viewer-Role")
    parser.add_argument("--roster", type=Path, help="JSON file with a list of players to seed")
    parser.add_argument("--demo", action="store_true", help="Seed the fixture with the demo roster")
    parser.add_argument("--assign", action="append", default=[], metavar="PLAYER=POS")
    parser.add_argument("--bench", action="append", default=[], metavar="PLAYER")
    parser.add_argument("--save", action="store_true", help="Save the lineup after edits")
    parser.add_argument("--export-path", type=Path, help="Download the lineup CSV to this path")
    args = parser.parse_args()

    headers = {"X-Viewer-Role": args.role}
    base = f"/fixtures/{args.fixture_id}"

    with httpx.Client(base_url=args.base_url, headers=headers) as client:
        if args.roster or args.demo:
            payload: dict = {"use_demo": bool(args.demo)}
            if args.roster:
                data = json.loads(args.roster.read_text(encoding="utf-8"))
                payload["players"] = data.get("players", data) if isinstance(data, dict) else data
            resp = client.put(f"{base}/roster", json=payload)
            resp.raise_for_status()
            print("Roster report:", json.dumps(resp.json()["report"], indent=2))

        for entry in args.assign:
            player_id, _, position = entry.partition("=")
            resp = client.post(f"{base}/lineup/assign", json={"player_id": player_id, "position": position})
            if resp.status_code == 403:
                raise SystemExit(f"role {args.role} cannot edit fixture {args.fixture_id}")
            resp.raise_for_status()
            print(f"{player_id} -> {position}: {resp.json()['outcome']}")

        for player_id in args.bench:
            resp = client.post(f"{base}/lineup/bench", json={"player_id": player_id})
            resp.raise_for_status()
            print(f"{player_id} -> bench: {resp.json()['outcome']}")

        if args.save:
            resp = client.post(f"{base}/lineup/save")
            resp.raise_for_status()

        resp = client.get(f"{base}/lineup")
        if resp.status_code == 404:
            raise SystemExit(f"fixture {args.fixture_id} not found")
        resp.raise_for_status()
        lineup = resp.json()
        print(f"Starters: {lineup['starters_count']}/{lineup['target']}")
        print(json.dumps(lineup["slots"], indent=2))

        if args.export_path:
            resp = client.get(f"{base}/lineup/export.csv")
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")


if __name__ == "__main__":
    main()
