"""Persistence layer for fixture rosters and saved lineups."""

from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pitchside.lineup.export import lineup_rows
from pitchside.models import LineupPlayer


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "PITCHSIDE_DB_PATH"


class LineupSaveError(RuntimeError):
    """Raised when a lineup could not be written; the caller's roster is untouched."""


@dataclass
class FixtureSummary:
    fixture_id: str
    players: int
    starters: int
    updated_at: Optional[datetime]


class LineupStore:
    """Simple SQLite-backed store for fixture rosters and lineups."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv(_DB_PATH_ENV)
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        elif os.getenv("PYTEST_CURRENT_TEST"):
            test_dir = Path(tempfile.gettempdir()) / "pitchside-test"
            test_dir.mkdir(parents=True, exist_ok=True)
            self.db_path = test_dir / "pitchside.sqlite"
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS fixture_rosters (
                fixture_id TEXT NOT NULL,
                player_id TEXT NOT NULL,
                name TEXT NOT NULL,
                number INTEGER NOT NULL,
                preferred_position TEXT,
                sort_order INTEGER NOT NULL,
                PRIMARY KEY (fixture_id, player_id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS lineups (
                fixture_id TEXT NOT NULL,
                player_id TEXT NOT NULL,
                position TEXT,
                is_starting INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                UNIQUE (fixture_id, player_id)
            )
            """
        )
        conn.commit()

    def save_roster(self, fixture_id: str, roster: Sequence[LineupPlayer]) -> None:
        """Replace the fixture's roster entries and seed their lineup rows."""

        with self._connect() as conn:
            conn.execute("DELETE FROM fixture_rosters WHERE fixture_id = ?", (fixture_id,))
            conn.execute("DELETE FROM lineups WHERE fixture_id = ?", (fixture_id,))
            conn.executemany(
                """
                INSERT INTO fixture_rosters (
                    fixture_id, player_id, name, number, preferred_position, sort_order
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        fixture_id,
                        player.player_id,
                        player.name,
                        player.number,
                        player.preferred_position.value if player.preferred_position else None,
                        index,
                    )
                    for index, player in enumerate(roster)
                ],
            )
            self._upsert_lineup(conn, fixture_id, roster)
            conn.commit()
        logger.info("Stored roster for fixture %s (%d players)", fixture_id, len(roster))

    def save_lineup(self, fixture_id: str, roster: Sequence[LineupPlayer]) -> None:
        """Upsert lineup rows keyed by (fixture_id, player_id)."""

        try:
            with self._connect() as conn:
                self._upsert_lineup(conn, fixture_id, roster)
                conn.commit()
        except sqlite3.Error as exc:
            raise LineupSaveError(f"Could not save lineup for fixture {fixture_id}: {exc}") from exc

    def _upsert_lineup(
        self,
        conn: sqlite3.Connection,
        fixture_id: str,
        roster: Sequence[LineupPlayer],
    ) -> None:
        now = datetime.now(timezone.utc).isoformat()
        conn.executemany(
            """
            INSERT INTO lineups (fixture_id, player_id, position, is_starting, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT (fixture_id, player_id) DO UPDATE SET
                position = excluded.position,
                is_starting = excluded.is_starting,
                updated_at = excluded.updated_at
            """,
            [
                (
                    row["fixture_id"],
                    row["player_id"],
                    row["position"],
                    int(row["is_starting"]),
                    now,
                    now,
                )
                for row in lineup_rows(fixture_id, roster)
            ],
        )

    def load_lineup(self, fixture_id: str) -> Tuple[LineupPlayer, ...]:
        """Return the fixture's roster with its saved lineup, or an empty tuple."""

        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT r.player_id, r.name, r.number, r.preferred_position,
                       l.position, COALESCE(l.is_starting, 0) AS is_starting
                FROM fixture_rosters AS r
                LEFT JOIN lineups AS l
                  ON l.fixture_id = r.fixture_id AND l.player_id = r.player_id
                WHERE r.fixture_id = ?
                ORDER BY r.sort_order
                """,
                (fixture_id,),
            ).fetchall()
        return tuple(
            LineupPlayer(
                player_id=row["player_id"],
                name=row["name"],
                number=row["number"],
                position=row["position"],
                is_starter=bool(row["is_starting"]),
                preferred_position=row["preferred_position"],
            )
            for row in rows
        )

    def list_fixtures(self, limit: int = 50) -> List[FixtureSummary]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT r.fixture_id AS fixture_id,
                       COUNT(*) AS players,
                       SUM(CASE WHEN l.is_starting = 1 AND l.position IS NOT NULL THEN 1 ELSE 0 END)
                           AS starters,
                       MAX(l.updated_at) AS updated_at
                FROM fixture_rosters AS r
                LEFT JOIN lineups AS l
                  ON l.fixture_id = r.fixture_id AND l.player_id = r.player_id
                GROUP BY r.fixture_id
                ORDER BY MAX(l.updated_at) DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [
            FixtureSummary(
                fixture_id=row["fixture_id"],
                players=int(row["players"]),
                starters=int(row["starters"] or 0),
                updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
            )
            for row in rows
        ]

    def delete_fixture(self, fixture_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM fixture_rosters WHERE fixture_id = ?", (fixture_id,))
            conn.execute("DELETE FROM lineups WHERE fixture_id = ?", (fixture_id,))
            conn.commit()
        return cursor.rowcount > 0


__all__ = ["FixtureSummary", "LineupSaveError", "LineupStore"]
