"""Pydantic models for API I/O."""

from .analysis import (
    MatchupAnalysisResponse,
    MatchupSampleResponse,
    ProjectionResponse,
    RecommendationBatchResponse,
    RecommendationRequest,
    RecommendationResponse,
    SeasonAverageResponse,
)
from .search import PlayerResponse, SearchResponse, SearchResultResponse, SuggestionResponse

__all__ = [
    "MatchupAnalysisResponse",
    "MatchupSampleResponse",
    "PlayerResponse",
    "ProjectionResponse",
    "RecommendationBatchResponse",
    "RecommendationRequest",
    "RecommendationResponse",
    "SearchResponse",
    "SearchResultResponse",
    "SeasonAverageResponse",
    "SuggestionResponse",
]
