"""Maps raw similarity scores from any retrieval path onto a 0-100 scale."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_percentage(score: Optional[float]) -> int:
    """
    Convert a raw score to an integer percentage.

    Scores already in [0, 1] (index relevance, non-negative cosine) scale
    directly; anything else is treated as cosine in [-1, 1] and shifted.
    """
    if score is None or not math.isfinite(score):
        return 0
    if 0.0 <= score <= 1.0:
        return _round_half_up(score * 100)
    shifted = min(1.0, max(0.0, (score + 1.0) / 2.0))
    return _round_half_up(shifted * 100)


def percentages_for(scores: Sequence[Optional[float]]) -> List[int]:
    """
    Percentages for one result set, non-decreasing in the raw score.

    The two-branch rule maps small negative cosines above small positive ones,
    so each distinct score is capped by the percentage of every higher score.
    """
    finite = sorted(
        {score for score in scores if score is not None and math.isfinite(score)},
        reverse=True,
    )
    capped: Dict[float, int] = {}
    ceiling = 100
    for score in finite:
        ceiling = min(ceiling, to_percentage(score))
        capped[score] = ceiling
    return [capped.get(score, 0) if score is not None else 0 for score in scores]


class ScoreNormalizer:
    """Injectable facade over the module-level rules."""

    def to_percentage(self, score: Optional[float]) -> int:
        return to_percentage(score)

    def normalize(self, scores: Sequence[Optional[float]]) -> List[int]:
        return percentages_for(scores)


__all__ = ["to_percentage", "percentages_for", "ScoreNormalizer"]
