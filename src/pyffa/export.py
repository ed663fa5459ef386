"""CSV export helpers for ranked recommendations."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from pyffa.models import Recommendation


RECOMMENDATION_HEADERS = (
    "rank",
    "player_id",
    "name",
    "position",
    "team",
    "projected_points",
    "matchup_rating",
    "confidence_level",
    "consistency_score",
    "injury_impact",
    "reasoning",
)


def export_recommendations_to_csv(recommendations: Sequence[Recommendation]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(RECOMMENDATION_HEADERS)
    for rec in recommendations:
        writer.writerow([
            rec.rank,
            rec.player.player_id,
            rec.player.name,
            rec.player.position,
            rec.player.team,
            f"{rec.projected_points:.2f}",
            rec.matchup_rating.value,
            f"{rec.confidence_level:.2f}",
            f"{rec.consistency_score:.3f}",
            rec.injury_impact.value,
            rec.reasoning,
        ])
    return buffer.getvalue()


__all__ = ["RECOMMENDATION_HEADERS", "export_recommendations_to_csv"]
