"""Projection, consistency and recommendation engines."""

from .consistency import consistency_score
from .matchup import MatchupAnalyzer
from .projection import confidence_level, performance_trend, project_points
from .recommendations import (
    RecommendationRanker,
    injury_impact,
    matchup_rating,
    rank_recommendations,
    recommendation_reasoning,
)

__all__ = [
    "MatchupAnalyzer",
    "RecommendationRanker",
    "confidence_level",
    "consistency_score",
    "injury_impact",
    "matchup_rating",
    "performance_trend",
    "project_points",
    "rank_recommendations",
    "recommendation_reasoning",
]
