"""Data sources consumed by the matchup analyzer."""

from .base import PlayerNotFound, SourceError, StatsSource, UpstreamFailure
from .memory import InMemorySource

__all__ = [
    "InMemorySource",
    "PlayerNotFound",
    "SourceError",
    "StatsSource",
    "UpstreamFailure",
]
