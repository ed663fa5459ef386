"""Canonical player and game-sample models shared across search and analysis."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerRecord(BaseModel):
    """Player metadata as held by the record store."""

    player_id: str = Field(..., min_length=1)
    name: str
    position: str
    team: str
    injury_status: Optional[str] = None
    is_active: bool = True
    last_updated: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)


class MatchupSample(BaseModel):
    """One historical game for a player against an opponent."""

    sample_id: str = Field(..., min_length=1)
    player_id: str = Field(..., min_length=1)
    opponent_team: str
    game_date: datetime
    fantasy_points: float
    performance_rating: float = 0.0
    season: int
    week: int = Field(..., ge=1, le=22)

    model_config = ConfigDict(frozen=True)
