"""Fuzzy player search and historical matchup analysis for fantasy football."""

from pyffa.analysis import MatchupAnalyzer, RecommendationRanker
from pyffa.search import generate_suggestions, search_players

search_records = search_players

__all__ = [
    "MatchupAnalyzer",
    "RecommendationRanker",
    "generate_suggestions",
    "search_players",
    "search_records",
]
