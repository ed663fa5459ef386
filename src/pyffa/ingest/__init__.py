"""Input adapters that normalize raw player and game-log data."""

from .records import (
    PlayerRow,
    SampleRow,
    canonical_team,
    load_players_csv,
    load_samples_csv,
    parse_game_date,
    rows_to_players,
    rows_to_samples,
)

__all__ = [
    "PlayerRow",
    "SampleRow",
    "canonical_team",
    "load_players_csv",
    "load_samples_csv",
    "parse_game_date",
    "rows_to_players",
    "rows_to_samples",
]
