from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from .search import PlayerResponse


class MatchupSampleResponse(BaseModel):
    sample_id: str
    opponent_team: str
    game_date: datetime
    fantasy_points: float
    performance_rating: float
    season: int
    week: int


class MatchupAnalysisResponse(BaseModel):
    player_id: str
    player_name: str
    opponent_team: str
    average_fantasy_points: float
    historical_games: List[MatchupSampleResponse]
    projected_points: float
    confidence_level: float
    comparison_to_season_average: float
    performance_trend: str
    sample_size: int


class ProjectionResponse(BaseModel):
    player_id: str
    opponent_team: str
    projected_points: float


class SeasonAverageResponse(BaseModel):
    player_id: str
    season: int
    average_fantasy_points: float


class RecommendationRequest(BaseModel):
    player_ids: List[str] = Field(default_factory=list, max_length=200)


class RecommendationResponse(BaseModel):
    rank: int
    player: PlayerResponse
    projected_points: float
    matchup_rating: str
    confidence_level: float
    consistency_score: float
    injury_impact: str
    reasoning: str


class RecommendationBatchResponse(BaseModel):
    requested: int
    recommendations: List[RecommendationResponse]
