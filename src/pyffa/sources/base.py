"""Boundary between the analysis engine and whatever supplies player data."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from pyffa.models import MatchupSample, PlayerRecord


class SourceError(Exception):
    """Base class for failures reported by a data source."""


class PlayerNotFound(SourceError, KeyError):
    """Raised when a source cannot resolve a player identifier."""

    def __init__(self, player_id: str):
        super().__init__(f"Player {player_id!r} not found")
        self.player_id = player_id

    def __str__(self) -> str:
        return str(self.args[0])


class UpstreamFailure(SourceError):
    """Raised when the source itself failed to fetch or read data."""


@runtime_checkable
class StatsSource(Protocol):
    """Lookups the matchup analyzer needs from a record store or remote client.

    Implementations raise :class:`PlayerNotFound` or :class:`UpstreamFailure`
    rather than returning empty placeholders; an empty list is a valid answer.
    """

    def get_player(self, player_id: str) -> PlayerRecord:
        ...

    def get_matchup_history(self, player_id: str, opponent_team: str) -> List[MatchupSample]:
        ...

    def get_season_stats(self, player_id: str, season: int) -> List[MatchupSample]:
        ...
