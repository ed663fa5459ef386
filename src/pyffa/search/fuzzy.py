"""Edit-distance helpers for typo-tolerant matching."""

from __future__ import annotations

from typing import List


def levenshtein_distance(source: str, target: str) -> int:
    """Return the minimum number of single-character edits turning ``source`` into ``target``.

    Insertions, deletions and substitutions each cost one. The full
    ``(len(source) + 1) x (len(target) + 1)`` table is built; callers apply
    their own distance thresholds.
    """

    rows = len(source) + 1
    cols = len(target) + 1
    matrix: List[List[int]] = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if source[i - 1] == target[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )

    return matrix[rows - 1][cols - 1]


__all__ = ["levenshtein_distance"]
