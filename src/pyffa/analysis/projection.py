"""Weighted point projections, confidence and trend detection."""

from __future__ import annotations

from statistics import fmean
from typing import Sequence

from pyffa.models import MatchupSample, PerformanceTrend


RECENT_GAMES = 5
RECENT_WEIGHT = 0.6
HISTORICAL_WEIGHT = 0.4
MINIMUM_GAMES_FOR_ANALYSIS = 2
CONFIDENCE_THRESHOLD_GAMES = 5
TREND_THRESHOLD = 0.1


def project_points(samples: Sequence[MatchupSample], season_average: float) -> float:
    """Blend the recent-game average with the full-history average.

    With no samples the season average is returned unchanged.
    """

    if not samples:
        return season_average

    recent = sorted(samples, key=lambda sample: sample.game_date, reverse=True)[:RECENT_GAMES]
    recent_average = fmean(sample.fantasy_points for sample in recent)
    historical_average = fmean(sample.fantasy_points for sample in samples)
    return recent_average * RECENT_WEIGHT + historical_average * HISTORICAL_WEIGHT


def confidence_level(sample_size: int) -> float:
    if sample_size >= CONFIDENCE_THRESHOLD_GAMES:
        return 0.9
    if sample_size >= MINIMUM_GAMES_FOR_ANALYSIS:
        return 0.6
    return 0.3


def performance_trend(samples: Sequence[MatchupSample]) -> PerformanceTrend:
    """Compare the later half of the history against the earlier half.

    The later half takes the extra game when the count is odd. The threshold
    is 10% of the earlier average, so an earlier average of zero makes any
    change count as a trend.
    """

    if len(samples) < MINIMUM_GAMES_FOR_ANALYSIS:
        return PerformanceTrend.INSUFFICIENT_DATA

    ordered = sorted(samples, key=lambda sample: sample.game_date)
    split = len(ordered) // 2
    first_average = fmean(sample.fantasy_points for sample in ordered[:split])
    second_average = fmean(sample.fantasy_points for sample in ordered[split:])

    difference = second_average - first_average
    threshold = first_average * TREND_THRESHOLD

    if difference > threshold:
        return PerformanceTrend.IMPROVING
    if difference < -threshold:
        return PerformanceTrend.DECLINING
    return PerformanceTrend.STABLE


__all__ = [
    "confidence_level",
    "performance_trend",
    "project_points",
]
