from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    position: str
    team: str
    injury_status: str | None = None
    is_active: bool
    last_updated: datetime | None = None


class SearchResultResponse(BaseModel):
    player: PlayerResponse
    relevance_score: int
    match_type: str


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResultResponse]


class SuggestionResponse(BaseModel):
    query: str
    suggestions: List[str]
