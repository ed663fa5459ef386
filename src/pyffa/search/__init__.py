"""Fuzzy player search, relevance ranking and suggestions."""

from .fuzzy import levenshtein_distance
from .relevance import classify_match, relevance_score, search_players
from .suggestions import generate_suggestions

__all__ = [
    "classify_match",
    "generate_suggestions",
    "levenshtein_distance",
    "relevance_score",
    "search_players",
]
