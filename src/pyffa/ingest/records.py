"""Helpers to load player and game-log CSVs and emit canonical records."""

from __future__ import annotations

import csv
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel

from pyffa.models import MatchupSample, PlayerRecord


logger = logging.getLogger(__name__)

NFL_TEAM_ALIAS_GROUPS: dict[str, list[str]] = {
    "ARI": ["ARI", "ARIZONA", "ARIZONA CARDINALS", "ARIZONA CARDS"],
    "ATL": ["ATL", "ATLANTA", "ATLANTA FALCONS"],
    "BAL": ["BAL", "BALTIMORE", "BALTIMORE RAVENS"],
    "BUF": ["BUF", "BUFFALO", "BUFFALO BILLS"],
    "CAR": ["CAR", "CAROLINA", "CAROLINA PANTHERS"],
    "CHI": ["CHI", "CHICAGO", "CHICAGO BEARS"],
    "CIN": ["CIN", "CINCINNATI", "CINCINNATI BENGALS", "BENGALS"],
    "CLE": ["CLE", "CLEVELAND", "CLEVELAND BROWNS", "BROWNS"],
    "DAL": ["DAL", "DALLAS", "DALLAS COWBOYS"],
    "DEN": ["DEN", "DENVER", "DENVER BRONCOS", "BRONCOS"],
    "DET": ["DET", "DETROIT", "DETROIT LIONS", "LIONS"],
    "GB": ["GB", "GNB", "GREEN BAY", "GREEN BAY PACKERS", "PACKERS"],
    "HOU": ["HOU", "HOUSTON", "HOUSTON TEXANS", "TEXANS"],
    "IND": ["IND", "INDIANAPOLIS", "INDIANAPOLIS COLTS", "COLTS"],
    "JAX": ["JAX", "JAC", "JACKSONVILLE", "JACKSONVILLE JAGUARS", "JAGUARS"],
    "KC": ["KC", "KAN", "KANSAS CITY", "KANSAS CITY CHIEFS", "CHIEFS"],
    "LAC": ["LAC", "LACH", "LOS ANGELES CHARGERS", "LA CHARGERS", "SAN DIEGO", "SAN DIEGO CHARGERS", "CHARGERS"],
    "LAR": ["LAR", "LA", "LOS ANGELES RAMS", "LA RAMS", "ST LOUIS", "ST LOUIS RAMS", "RAMS"],
    "LV": ["LV", "LVR", "LAS VEGAS", "LAS VEGAS RAIDERS", "OAKLAND", "OAKLAND RAIDERS", "RAIDERS"],
    "MIA": ["MIA", "MIAMI", "MIAMI DOLPHINS", "DOLPHINS"],
    "MIN": ["MIN", "MINNESOTA", "MINNESOTA VIKINGS", "VIKINGS"],
    "NE": ["NE", "NWE", "NEW ENGLAND", "NEW ENGLAND PATRIOTS", "PATRIOTS"],
    "NO": ["NO", "NOR", "NEW ORLEANS", "NEW ORLEANS SAINTS", "SAINTS"],
    "NYG": ["NYG", "NEW YORK", "NEW YORK GIANTS", "NY GIANTS", "GIANTS"],
    "NYJ": ["NYJ", "NEW YORK JETS", "NY JETS", "JETS"],
    "PHI": ["PHI", "PHILA", "PHILADELPHIA", "PHILADELPHIA EAGLES", "EAGLES"],
    "PIT": ["PIT", "PITTSBURGH", "PITTSBURGH STEELERS", "STEELERS"],
    "SEA": ["SEA", "SEATTLE", "SEATTLE SEAHAWKS", "SEAHAWKS"],
    "SF": ["SF", "SFO", "SAN FRANCISCO", "SAN FRANCISCO 49ERS", "SF 49ERS", "49ERS"],
    "TB": ["TB", "TAM", "TAMPA BAY", "TAMPA BAY BUCCANEERS", "BUCCANEERS", "BUCS"],
    "TEN": ["TEN", "TENNESSEE", "TENNESSEE TITANS", "TITANS"],
    "WAS": ["WAS", "WSH", "WASHINGTON", "WASHINGTON COMMANDERS", "WASHINGTON FOOTBALL TEAM", "COMMANDERS"],
}


def _team_token(value: str) -> str:
    return re.sub(r"[^A-Z0-9]", "", value.upper())


def _build_alias_lookup() -> dict[str, str]:
    lookup: dict[str, str] = {}
    for abbr, variants in NFL_TEAM_ALIAS_GROUPS.items():
        for variant in variants:
            key = _team_token(variant)
            if key:
                lookup.setdefault(key, abbr)
    return lookup


TEAM_ALIAS_LOOKUP = _build_alias_lookup()


def canonical_team(team: str) -> str:
    """Resolve a team name or alias to its abbreviation, leaving unknowns upper-cased."""

    token = _team_token(team)
    if not token:
        return team.strip().upper()
    return TEAM_ALIAS_LOOKUP.get(token, team.strip().upper())


DEFAULT_PLAYERS_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "position": "position",
    "team": "team",
    "injury_status": "injury_status",
    "is_active": "active",
}

DEFAULT_SAMPLES_MAPPING = {
    "sample_id": "game_id",
    "player_id": "player_id",
    "opponent_team": "opponent",
    "game_date": "game_date",
    "fantasy_points": "fantasy_points",
    "performance_rating": "rating",
    "season": "season",
    "week": "week",
}


def _extract(row: Mapping[str, str], column: Optional[str]) -> Optional[str]:
    """Read a column, joining ``A|B`` columns with spaces."""

    if column is None:
        return None
    if "|" in column:
        parts = [row.get(col.strip(), "").strip() for col in column.split("|")]
        parts = [part for part in parts if part]
        return " ".join(parts) if parts else None
    value = row.get(column)
    if value is None:
        return None
    value = value.strip()
    return value or None


class PlayerRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_position: str = ""
    raw_team: str = ""
    raw_injury_status: Optional[str] = None
    raw_active: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "PlayerRow":
        return cls(
            raw_id=_extract(row, mapping.get("player_id")),
            raw_name=_extract(row, mapping.get("name", "name")) or "",
            raw_position=_extract(row, mapping.get("position", "position")) or "",
            raw_team=_extract(row, mapping.get("team", "team")) or "",
            raw_injury_status=_extract(row, mapping.get("injury_status")),
            raw_active=_extract(row, mapping.get("is_active")),
        )


class SampleRow(BaseModel):
    raw_id: Optional[str] = None
    raw_player_id: str
    raw_opponent: str
    raw_game_date: str
    raw_points: str
    raw_rating: Optional[str] = None
    raw_season: Optional[str] = None
    raw_week: str

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "SampleRow":
        return cls(
            raw_id=_extract(row, mapping.get("sample_id")),
            raw_player_id=_extract(row, mapping.get("player_id", "player_id")) or "",
            raw_opponent=_extract(row, mapping.get("opponent_team", "opponent")) or "",
            raw_game_date=_extract(row, mapping.get("game_date", "game_date")) or "",
            raw_points=_extract(row, mapping.get("fantasy_points", "fantasy_points")) or "0",
            raw_rating=_extract(row, mapping.get("performance_rating")),
            raw_season=_extract(row, mapping.get("season")),
            raw_week=_extract(row, mapping.get("week", "week")) or "",
        )


def _parse_flag(value: Optional[str], *, default: bool = True) -> bool:
    if value is None:
        return default
    text = value.strip().lower()
    if text in {"1", "true", "t", "yes", "y", "active"}:
        return True
    if text in {"0", "false", "f", "no", "n", "inactive"}:
        return False
    return default


def _parse_float(raw: Optional[str], *, field: str, default: float = 0.0) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        raise ValueError(f"{field} '{raw}' is not numeric") from None


def _parse_int(raw: str, *, field: str) -> int:
    digits = raw.strip()
    try:
        return int(digits)
    except ValueError:
        raise ValueError(f"{field} '{raw}' is not an integer") from None


def parse_game_date(raw: str) -> datetime:
    """Parse ISO dates/datetimes or epoch milliseconds into an aware datetime."""

    text = raw.strip()
    if not text:
        raise ValueError("game date is empty")
    if text.isdigit():
        return datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"game date '{raw}' is not an ISO date or epoch milliseconds") from None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def rows_to_players(rows: Sequence[PlayerRow]) -> List[PlayerRecord]:
    records: List[PlayerRecord] = []
    for row in rows:
        injury_status = row.raw_injury_status
        records.append(
            PlayerRecord(
                player_id=row.raw_id or row.raw_name,
                name=row.raw_name,
                position=row.raw_position.upper(),
                team=canonical_team(row.raw_team) if row.raw_team else "",
                injury_status=injury_status.strip() if injury_status else None,
                is_active=_parse_flag(row.raw_active),
            )
        )
    return records


def rows_to_samples(rows: Sequence[SampleRow]) -> List[MatchupSample]:
    samples: List[MatchupSample] = []
    for row in rows:
        game_date = parse_game_date(row.raw_game_date)
        week = _parse_int(row.raw_week, field="week")
        season = _parse_int(row.raw_season, field="season") if row.raw_season else game_date.year
        opponent = canonical_team(row.raw_opponent)
        samples.append(
            MatchupSample(
                sample_id=row.raw_id or f"{row.raw_player_id}:{season}:{week}:{opponent}",
                player_id=row.raw_player_id,
                opponent_team=opponent,
                game_date=game_date,
                fantasy_points=_parse_float(row.raw_points, field="fantasy points"),
                performance_rating=_parse_float(row.raw_rating, field="performance rating"),
                season=season,
                week=week,
            )
        )
    return samples


def _read_rows(path: Path) -> List[dict[str, str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def load_players_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    mapping = mapping or DEFAULT_PLAYERS_MAPPING
    rows = [PlayerRow.from_mapping(row, mapping) for row in _read_rows(path)]
    records = rows_to_players(rows)
    logger.info("Loaded %s players from %s", len(records), path)
    return records


def load_samples_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[MatchupSample]:
    mapping = mapping or DEFAULT_SAMPLES_MAPPING
    rows = [SampleRow.from_mapping(row, mapping) for row in _read_rows(path)]
    samples = rows_to_samples(rows)
    logger.info("Loaded %s game samples from %s", len(samples), path)
    return samples
