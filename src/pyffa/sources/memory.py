"""Dictionary-backed source for snapshots held in memory."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from pyffa.models import MatchupSample, PlayerRecord

from .base import PlayerNotFound


class InMemorySource:
    """Read-only source over a fixed batch of players and samples."""

    def __init__(
        self,
        players: Iterable[PlayerRecord] = (),
        samples: Iterable[MatchupSample] = (),
    ):
        self._players: Dict[str, PlayerRecord] = {player.player_id: player for player in players}
        self._samples: Dict[str, List[MatchupSample]] = defaultdict(list)
        for sample in samples:
            self._samples[sample.player_id].append(sample)

    @property
    def players(self) -> List[PlayerRecord]:
        return list(self._players.values())

    def get_player(self, player_id: str) -> PlayerRecord:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFound(player_id) from None

    def get_matchup_history(self, player_id: str, opponent_team: str) -> List[MatchupSample]:
        opponent = opponent_team.upper()
        return [
            sample
            for sample in self._samples.get(player_id, ())
            if sample.opponent_team.upper() == opponent
        ]

    def get_season_stats(self, player_id: str, season: int) -> List[MatchupSample]:
        return [sample for sample in self._samples.get(player_id, ()) if sample.season == season]
