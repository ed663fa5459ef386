"""Historical matchup analysis and the analyzer facade."""

from __future__ import annotations

import logging
from statistics import fmean
from typing import List, Sequence

from pyffa.config import Settings
from pyffa.models import MatchupAnalysis, MatchupSample, PerformanceTrend, Recommendation
from pyffa.sources import SourceError, StatsSource

from .projection import confidence_level, performance_trend, project_points
from .recommendations import RecommendationRanker


logger = logging.getLogger(__name__)

UNKNOWN_PLAYER_NAME = "Unknown Player"


class MatchupAnalyzer:
    """Projections and comparisons for players against specific opponents.

    Only the first lookup each operation depends on is allowed to fail the
    call; secondary lookups (player name, season average) degrade to defaults.
    """

    def __init__(
        self,
        source: StatsSource,
        *,
        current_season: int | None = None,
        max_workers: int | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or Settings()
        self.source = source
        self.current_season = current_season if current_season is not None else settings.current_season
        self.ranker = RecommendationRanker(
            source,
            current_season=self.current_season,
            max_workers=max_workers if max_workers is not None else settings.max_workers,
        )

    def calculate_season_average(self, player_id: str, season: int) -> float:
        stats = self.source.get_season_stats(player_id, season)
        if not stats:
            return 0.0
        return fmean(sample.fantasy_points for sample in stats)

    def _season_average_or_zero(self, player_id: str) -> float:
        try:
            return self.calculate_season_average(player_id, self.current_season)
        except SourceError as exc:
            logger.debug("Season average unavailable for %s: %s", player_id, exc)
            return 0.0

    def _player_name(self, player_id: str) -> str:
        try:
            return self.source.get_player(player_id).name
        except SourceError as exc:
            logger.debug("Player name unavailable for %s: %s", player_id, exc)
            return UNKNOWN_PLAYER_NAME

    def analyze_matchup(self, player_id: str, opponent_team: str) -> MatchupAnalysis:
        history = self.source.get_matchup_history(player_id, opponent_team)
        player_name = self._player_name(player_id)

        if not history:
            return MatchupAnalysis(
                player_id=player_id,
                player_name=player_name,
                opponent_team=opponent_team,
                average_fantasy_points=0.0,
                historical_games=(),
                projected_points=0.0,
                confidence_level=0.0,
                comparison_to_season_average=0.0,
                performance_trend=PerformanceTrend.INSUFFICIENT_DATA,
                sample_size=0,
            )

        season_average = self._season_average_or_zero(player_id)
        average = fmean(sample.fantasy_points for sample in history)
        if season_average > 0:
            comparison = (average - season_average) / season_average * 100
        else:
            comparison = 0.0

        return MatchupAnalysis(
            player_id=player_id,
            player_name=player_name,
            opponent_team=opponent_team,
            average_fantasy_points=average,
            historical_games=tuple(_most_recent_first(history)),
            projected_points=project_points(history, season_average),
            confidence_level=confidence_level(len(history)),
            comparison_to_season_average=comparison,
            performance_trend=performance_trend(history),
            sample_size=len(history),
        )

    def calculate_projected_points(self, player_id: str, opponent_team: str) -> float:
        history = self.source.get_matchup_history(player_id, opponent_team)
        if not history:
            return self.calculate_season_average(player_id, self.current_season)
        return project_points(history, self._season_average_or_zero(player_id))

    def generate_weekly_recommendations(self, player_ids: Sequence[str]) -> List[Recommendation]:
        return self.ranker.rank(player_ids)


def _most_recent_first(samples: Sequence[MatchupSample]) -> List[MatchupSample]:
    return sorted(samples, key=lambda sample: sample.game_date, reverse=True)


__all__ = ["MatchupAnalyzer", "UNKNOWN_PLAYER_NAME"]
