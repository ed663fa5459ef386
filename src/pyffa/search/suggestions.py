"""Autocomplete suggestions drawn from the player pool."""

from __future__ import annotations

from typing import Dict, List, Sequence

from pyffa.models import PlayerRecord


MIN_QUERY_LENGTH = 2
MIN_WORD_LENGTH = 3


def generate_suggestions(
    players: Sequence[PlayerRecord],
    partial_query: str,
    max_suggestions: int = 5,
) -> List[str]:
    """Suggest names, name words, positions and teams starting with ``partial_query``.

    Suggestions keep the casing of the source data and are returned in
    discovery order with duplicates removed.
    """

    prefix = partial_query.strip().lower()
    if len(prefix) < MIN_QUERY_LENGTH or max_suggestions <= 0:
        return []

    # dict preserves insertion order; used as an ordered set
    suggestions: Dict[str, None] = {}

    for player in players:
        if player.name.lower().startswith(prefix):
            suggestions.setdefault(player.name)
        for word in player.name.split():
            if len(word) >= MIN_WORD_LENGTH and word.lower().startswith(prefix):
                suggestions.setdefault(word)

    for position in dict.fromkeys(player.position for player in players):
        if position.lower().startswith(prefix):
            suggestions.setdefault(position)

    for team in dict.fromkeys(player.team for player in players):
        if team.lower().startswith(prefix):
            suggestions.setdefault(team)

    return list(suggestions)[:max_suggestions]


__all__ = ["generate_suggestions"]
