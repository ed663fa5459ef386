"""Domain models for players, game samples and analysis results."""

from .analysis import (
    InjuryImpact,
    MatchType,
    MatchupAnalysis,
    MatchupRating,
    PerformanceTrend,
    Recommendation,
    SearchResult,
)
from .player import MatchupSample, PlayerRecord

__all__ = [
    "InjuryImpact",
    "MatchType",
    "MatchupAnalysis",
    "MatchupRating",
    "MatchupSample",
    "PerformanceTrend",
    "PlayerRecord",
    "Recommendation",
    "SearchResult",
]
