"""Relevance scoring and ranking for player search."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from pyffa.models import MatchType, PlayerRecord, SearchResult

from .fuzzy import levenshtein_distance


MAX_DISTANCE_THRESHOLD = 3
EXACT_MATCH_SCORE = 100
PREFIX_MATCH_BONUS = 20
CONTAINS_MATCH_BONUS = 10
POSITION_MATCH_BONUS = 15
TEAM_MATCH_BONUS = 15
ACTIVE_PLAYER_BONUS = 5
OUT_PLAYER_PENALTY = 10


def normalize_query(query: str) -> str:
    return query.strip().lower()


def _is_out(player: PlayerRecord) -> bool:
    return "out" in (player.injury_status or "").lower()


def fuzzy_token_score(name_words: Iterable[str], query_words: Sequence[str]) -> int:
    """Best per-token similarity (0-10) among word pairs within the distance threshold."""

    best = 0
    for name_word in name_words:
        for query_word in query_words:
            max_length = max(len(name_word), len(query_word))
            if max_length == 0:
                continue
            distance = levenshtein_distance(name_word, query_word)
            if distance <= MAX_DISTANCE_THRESHOLD:
                best = max(best, (max_length - distance) * 10 // max_length)
    return best


def relevance_score(player: PlayerRecord, query: str) -> int:
    """Score ``player`` against an already normalized query; 0 means no match."""

    name = player.name.lower()
    if name == query:
        return EXACT_MATCH_SCORE

    score = 0
    if player.position.lower() == query:
        score += POSITION_MATCH_BONUS
    if player.team.lower() == query:
        score += TEAM_MATCH_BONUS
    if name.startswith(query):
        score += PREFIX_MATCH_BONUS
    if query in name:
        score += CONTAINS_MATCH_BONUS

    score += fuzzy_token_score(name.split(), query.split())

    if player.is_active:
        score += ACTIVE_PLAYER_BONUS

    # Injured players stay in the results, just lower down.
    if _is_out(player):
        score = max(1, score - OUT_PLAYER_PENALTY)

    return score


def classify_match(player: PlayerRecord, query: str) -> MatchType:
    name = player.name.lower()
    if name == query:
        return MatchType.EXACT_NAME
    if name.startswith(query):
        return MatchType.PREFIX_NAME
    if query in name:
        return MatchType.CONTAINS_NAME
    if player.position.lower() == query:
        return MatchType.POSITION
    if player.team.lower() == query:
        return MatchType.TEAM
    return MatchType.FUZZY


def search_players(players: Sequence[PlayerRecord], query: str) -> List[SearchResult]:
    """Return matching players ordered by relevance, then by name."""

    normalized = normalize_query(query)
    if not normalized:
        return []

    results: List[SearchResult] = []
    for player in players:
        score = relevance_score(player, normalized)
        if score <= 0:
            continue
        results.append(
            SearchResult(
                player=player,
                relevance_score=score,
                match_type=classify_match(player, normalized),
            )
        )

    results.sort(key=lambda result: (-result.relevance_score, result.player.name))
    return results


__all__ = [
    "classify_match",
    "fuzzy_token_score",
    "normalize_query",
    "relevance_score",
    "search_players",
]
