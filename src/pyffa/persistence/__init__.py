"""SQLite-backed storage for players, game samples and search history."""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from pyffa.models import MatchupSample, PlayerRecord
from pyffa.sources import PlayerNotFound, UpstreamFailure


class _SQLiteStore(ABC):
    def __init__(self, db_path: Path | str):
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
            self._use_uri = False
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            raise UpstreamFailure(f"Unable to open {self.db_path}: {exc}") from exc
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise UpstreamFailure(f"Query against {self.db_path} failed: {exc}") from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._session() as conn:
            self._create_schema(conn)

    @abstractmethod
    def _create_schema(self, conn: sqlite3.Connection) -> None:
        ...


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


class PlayerStore(_SQLiteStore):
    """Record store keyed by player id; also serves as a :class:`StatsSource`."""

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                position TEXT NOT NULL,
                team TEXT NOT NULL,
                injury_status TEXT,
                is_active INTEGER NOT NULL,
                last_updated TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS matchup_samples (
                id TEXT PRIMARY KEY,
                player_id TEXT NOT NULL,
                opponent_team TEXT NOT NULL,
                game_date TEXT NOT NULL,
                fantasy_points REAL NOT NULL,
                performance_rating REAL NOT NULL,
                season INTEGER NOT NULL,
                week INTEGER NOT NULL
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_samples_player ON matchup_samples (player_id)"
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_samples_opponent ON matchup_samples (opponent_team)"
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_samples_season_week ON matchup_samples (season, week)"
        )

    def upsert_players(self, players: Iterable[PlayerRecord]) -> int:
        now = datetime.now(timezone.utc)
        payload = [
            (
                player.player_id,
                player.name,
                player.position,
                player.team,
                player.injury_status,
                int(player.is_active),
                (player.last_updated or now).isoformat(),
            )
            for player in players
        ]
        with self._session() as conn:
            conn.executemany(
                """
                INSERT OR REPLACE INTO players (
                    id, name, position, team, injury_status, is_active, last_updated
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                payload,
            )
        return len(payload)

    def upsert_samples(self, samples: Iterable[MatchupSample]) -> int:
        payload = [
            (
                sample.sample_id,
                sample.player_id,
                sample.opponent_team,
                sample.game_date.isoformat(),
                sample.fantasy_points,
                sample.performance_rating,
                sample.season,
                sample.week,
            )
            for sample in samples
        ]
        with self._session() as conn:
            conn.executemany(
                """
                INSERT OR REPLACE INTO matchup_samples (
                    id, player_id, opponent_team, game_date, fantasy_points,
                    performance_rating, season, week
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                payload,
            )
        return len(payload)

    def get_player(self, player_id: str) -> PlayerRecord:
        with self._session() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            raise PlayerNotFound(player_id)
        return self._row_to_player(row)

    def list_players(self, *, active_only: bool = False) -> List[PlayerRecord]:
        query = "SELECT * FROM players"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY name"
        with self._session() as conn:
            rows = conn.execute(query).fetchall()
        return [self._row_to_player(row) for row in rows]

    def get_matchup_history(self, player_id: str, opponent_team: str) -> List[MatchupSample]:
        with self._session() as conn:
            rows = conn.execute(
                """
                SELECT * FROM matchup_samples
                WHERE player_id = ? AND UPPER(opponent_team) = UPPER(?)
                ORDER BY game_date DESC
                """,
                (player_id, opponent_team),
            ).fetchall()
        return [self._row_to_sample(row) for row in rows]

    def get_season_stats(self, player_id: str, season: int) -> List[MatchupSample]:
        with self._session() as conn:
            rows = conn.execute(
                """
                SELECT * FROM matchup_samples
                WHERE player_id = ? AND season = ?
                ORDER BY week
                """,
                (player_id, season),
            ).fetchall()
        return [self._row_to_sample(row) for row in rows]

    def samples_in_range(
        self,
        season: int,
        *,
        week_from: int = 1,
        week_to: Optional[int] = None,
    ) -> List[MatchupSample]:
        """Return every sample for ``season`` with ``week_from <= week <= week_to``."""

        params: list[object] = [season, week_from]
        query = "SELECT * FROM matchup_samples WHERE season = ? AND week >= ?"
        if week_to is not None:
            query += " AND week <= ?"
            params.append(week_to)
        query += " ORDER BY week, player_id"
        with self._session() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_sample(row) for row in rows]

    def _row_to_player(self, row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            player_id=row["id"],
            name=row["name"],
            position=row["position"],
            team=row["team"],
            injury_status=row["injury_status"],
            is_active=bool(row["is_active"]),
            last_updated=_parse_timestamp(row["last_updated"]),
        )

    def _row_to_sample(self, row: sqlite3.Row) -> MatchupSample:
        return MatchupSample(
            sample_id=row["id"],
            player_id=row["player_id"],
            opponent_team=row["opponent_team"],
            game_date=datetime.fromisoformat(row["game_date"]),
            fantasy_points=row["fantasy_points"],
            performance_rating=row["performance_rating"],
            season=row["season"],
            week=row["week"],
        )


@dataclass
class SearchHistoryItem:
    query: str
    timestamp: datetime
    result_count: int
    selected_player_id: Optional[str]
    frequency: int


class SearchHistoryStore(_SQLiteStore):
    """Search history kept outside the scoring engine.

    Queries are deduplicated case-insensitively; re-running a query bumps its
    frequency and moves it to the front.
    """

    def __init__(self, db_path: Path | str, *, max_history: int = 50, max_recent: int = 10):
        self.max_history = max(1, max_history)
        self.max_recent = max(1, max_recent)
        super().__init__(db_path)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS search_history (
                query_key TEXT PRIMARY KEY,
                query TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                result_count INTEGER NOT NULL,
                selected_player_id TEXT,
                frequency INTEGER NOT NULL
            )
            """
        )

    def add_to_history(
        self,
        query: str,
        result_count: int,
        selected_player_id: Optional[str] = None,
        *,
        timestamp: Optional[datetime] = None,
    ) -> Optional[SearchHistoryItem]:
        trimmed = query.strip()
        if not trimmed:
            return None
        key = trimmed.lower()
        timestamp = timestamp or datetime.now(timezone.utc)
        with self._session() as conn:
            row = conn.execute(
                "SELECT frequency FROM search_history WHERE query_key = ?", (key,)
            ).fetchone()
            frequency = (row["frequency"] if row else 0) + 1
            conn.execute(
                """
                INSERT OR REPLACE INTO search_history (
                    query_key, query, timestamp, result_count, selected_player_id, frequency
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (key, trimmed, timestamp.isoformat(), result_count, selected_player_id, frequency),
            )
            conn.execute(
                """
                DELETE FROM search_history WHERE query_key NOT IN (
                    SELECT query_key FROM search_history
                    ORDER BY timestamp DESC LIMIT ?
                )
                """,
                (self.max_history,),
            )
        return SearchHistoryItem(
            query=trimmed,
            timestamp=timestamp,
            result_count=result_count,
            selected_player_id=selected_player_id,
            frequency=frequency,
        )

    def list_history(self, limit: Optional[int] = None) -> List[SearchHistoryItem]:
        with self._session() as conn:
            rows = conn.execute(
                "SELECT * FROM search_history ORDER BY timestamp DESC LIMIT ?",
                (limit if limit is not None else self.max_history,),
            ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def recent_searches(self, limit: Optional[int] = None) -> List[str]:
        limit = min(limit, self.max_recent) if limit is not None else self.max_recent
        return [item.query for item in self.list_history(limit)]

    def popular_searches(self, limit: int = 10) -> List[SearchHistoryItem]:
        with self._session() as conn:
            rows = conn.execute(
                "SELECT * FROM search_history ORDER BY frequency DESC, timestamp DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def suggestions(self, partial_query: str, max_suggestions: int = 5) -> List[str]:
        """Recent searches for short input, otherwise past queries containing it."""

        if len(partial_query) < 2:
            return self.recent_searches(max_suggestions)
        needle = partial_query.strip().lower()
        matches = [
            item
            for item in self.popular_searches(self.max_history)
            if needle in item.query.lower()
        ]
        return [item.query for item in matches[:max_suggestions]]

    def remove(self, query: str) -> None:
        with self._session() as conn:
            conn.execute(
                "DELETE FROM search_history WHERE query_key = ?", (query.strip().lower(),)
            )

    def clear(self) -> None:
        with self._session() as conn:
            conn.execute("DELETE FROM search_history")

    def _row_to_item(self, row: sqlite3.Row) -> SearchHistoryItem:
        return SearchHistoryItem(
            query=row["query"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            result_count=row["result_count"],
            selected_player_id=row["selected_player_id"],
            frequency=row["frequency"],
        )


__all__ = [
    "PlayerStore",
    "SearchHistoryItem",
    "SearchHistoryStore",
]
