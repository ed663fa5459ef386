"""Weekly recommendation scoring and batch ranking."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from statistics import fmean
from typing import Dict, List, Optional, Sequence

from pyffa.models import InjuryImpact, MatchupRating, Recommendation
from pyffa.sources import SourceError, StatsSource

from .consistency import DEFAULT_CONSISTENCY, consistency_score
from .projection import CONFIDENCE_THRESHOLD_GAMES, confidence_level


logger = logging.getLogger(__name__)

_RATING_THRESHOLDS = (
    (20.0, MatchupRating.EXCELLENT),
    (15.0, MatchupRating.GOOD),
    (10.0, MatchupRating.AVERAGE),
    (5.0, MatchupRating.POOR),
)

_POINTS_PHRASES = (
    (20.0, "excellent projected performance"),
    (15.0, "strong projected performance"),
    (10.0, "average projected performance"),
)

_CONSISTENCY_PHRASES = (
    (0.8, "very consistent"),
    (0.6, "moderately consistent"),
)

_INJURY_NOTES = {
    InjuryImpact.NONE: "",
    InjuryImpact.MINOR: " (minor injury concern)",
    InjuryImpact.MODERATE: " (significant injury risk)",
    InjuryImpact.MAJOR: " (major injury concern)",
    InjuryImpact.OUT: " (currently injured)",
}

_INJURY_KEYWORDS = {
    "": InjuryImpact.NONE,
    "healthy": InjuryImpact.NONE,
    "questionable": InjuryImpact.MINOR,
    "probable": InjuryImpact.MINOR,
    "doubtful": InjuryImpact.MODERATE,
    "out": InjuryImpact.OUT,
    "injured reserve": InjuryImpact.OUT,
    "ir": InjuryImpact.OUT,
}


def matchup_rating(projected_points: float) -> MatchupRating:
    for threshold, rating in _RATING_THRESHOLDS:
        if projected_points >= threshold:
            return rating
    return MatchupRating.AVOID


def injury_impact(injury_status: Optional[str]) -> InjuryImpact:
    """Map a free-text availability status onto an impact tier.

    Unrecognised statuses are treated as a minor concern.
    """

    key = (injury_status or "").strip().lower()
    return _INJURY_KEYWORDS.get(key, InjuryImpact.MINOR)


def recommendation_reasoning(
    projected_points: float,
    consistency: float,
    impact: InjuryImpact,
) -> str:
    points = next(
        (phrase for threshold, phrase in _POINTS_PHRASES if projected_points >= threshold),
        "below-average projected performance",
    )
    form = next(
        (phrase for threshold, phrase in _CONSISTENCY_PHRASES if consistency >= threshold),
        "inconsistent",
    )
    return f"{points} with {form} recent form{_INJURY_NOTES[impact]}"


def rank_recommendations(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    """Order by projected points then consistency (both descending) and assign ranks."""

    ordered = sorted(
        recommendations,
        key=lambda rec: (rec.projected_points, rec.consistency_score),
        reverse=True,
    )
    return [replace(rec, rank=index) for index, rec in enumerate(ordered, start=1)]


class RecommendationRanker:
    """Score a roster concurrently and rank the results.

    Each player is scored in its own worker. A player whose record cannot be
    fetched is left out of the ranking; the rest of the batch is unaffected.
    """

    def __init__(self, source: StatsSource, *, current_season: int, max_workers: int = 8):
        self.source = source
        self.current_season = current_season
        self.max_workers = max(1, max_workers)

    def score_player(self, player_id: str) -> Recommendation:
        player = self.source.get_player(player_id)

        try:
            season_stats = self.source.get_season_stats(player_id, self.current_season)
        except SourceError as exc:
            logger.debug("Season stats unavailable for %s: %s", player_id, exc)
            projected = 0.0
            consistency = DEFAULT_CONSISTENCY
        else:
            points = [sample.fantasy_points for sample in season_stats]
            projected = fmean(points) if points else 0.0
            consistency = consistency_score(points)

        impact = injury_impact(player.injury_status)
        return Recommendation(
            player=player,
            projected_points=projected,
            matchup_rating=matchup_rating(projected),
            confidence_level=confidence_level(CONFIDENCE_THRESHOLD_GAMES),
            consistency_score=consistency,
            injury_impact=impact,
            reasoning=recommendation_reasoning(projected, consistency, impact),
        )

    def rank(self, player_ids: Sequence[str]) -> List[Recommendation]:
        if not player_ids:
            return []

        scored: Dict[int, Recommendation] = {}
        workers = min(self.max_workers, len(player_ids))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pyffa-rank") as pool:
            futures = {
                pool.submit(self.score_player, player_id): (index, player_id)
                for index, player_id in enumerate(player_ids)
            }
            for future in as_completed(futures):
                index, player_id = futures[future]
                try:
                    scored[index] = future.result()
                except Exception as exc:
                    logger.warning("Dropping %s from recommendations: %s", player_id, exc)

        # Keep submission order so ties beyond consistency stay deterministic.
        ranked = rank_recommendations([scored[index] for index in sorted(scored)])
        logger.info(
            "Ranked %s/%s players for season %s",
            len(ranked),
            len(player_ids),
            self.current_season,
        )
        return ranked


__all__ = [
    "RecommendationRanker",
    "injury_impact",
    "matchup_rating",
    "rank_recommendations",
    "recommendation_reasoning",
]
