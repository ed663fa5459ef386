"""Result types produced by the search and matchup engines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .player import MatchupSample, PlayerRecord


class MatchType(str, Enum):
    EXACT_NAME = "exact_name"
    PREFIX_NAME = "prefix_name"
    CONTAINS_NAME = "contains_name"
    POSITION = "position"
    TEAM = "team"
    FUZZY = "fuzzy"


class MatchupRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    AVOID = "avoid"


class InjuryImpact(str, Enum):
    NONE = "none"
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    OUT = "out"


class PerformanceTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class SearchResult:
    player: PlayerRecord
    relevance_score: int
    match_type: MatchType


@dataclass(frozen=True)
class Recommendation:
    """Weekly start/sit recommendation for a single player.

    ``rank`` stays 0 until the whole batch has been scored and ordered.
    """

    player: PlayerRecord
    projected_points: float
    matchup_rating: MatchupRating
    confidence_level: float
    consistency_score: float
    injury_impact: InjuryImpact
    reasoning: str
    rank: int = 0


@dataclass(frozen=True)
class MatchupAnalysis:
    """Historical performance of a player against one opponent."""

    player_id: str
    player_name: str
    opponent_team: str
    average_fantasy_points: float
    historical_games: Tuple[MatchupSample, ...]
    projected_points: float
    confidence_level: float
    comparison_to_season_average: float
    performance_trend: PerformanceTrend
    sample_size: int
