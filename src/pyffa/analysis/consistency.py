"""Consistency scoring based on the coefficient of variation."""

from __future__ import annotations

from statistics import fmean, pstdev
from typing import Iterable


DEFAULT_CONSISTENCY = 0.5


def consistency_score(scores: Iterable[float]) -> float:
    """Return ``1 - clamp(stddev / mean, 0, 1)``; higher is steadier.

    Fewer than two scores yields the neutral default. A non-positive mean is
    treated as maximally inconsistent.
    """

    values = list(scores)
    if len(values) < 2:
        return DEFAULT_CONSISTENCY

    mean = fmean(values)
    if mean > 0:
        variation = pstdev(values, mu=mean) / mean
    else:
        variation = 1.0
    return 1.0 - max(0.0, min(1.0, variation))


__all__ = ["DEFAULT_CONSISTENCY", "consistency_score"]
