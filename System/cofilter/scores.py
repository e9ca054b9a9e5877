"""Result records returned by the ranking layer."""

from typing import List, NamedTuple, Sequence, TypeVar

class CategoryScore(NamedTuple):
    """A category paired with a similarity, value or predicted value."""
    name: str
    value: float


class FeatureScore(NamedTuple):
    """A feature paired with its similarity-weighted score."""
    name: str
    value: float


ScoreT = TypeVar("ScoreT", CategoryScore, FeatureScore)

def rank_scores(scores: Sequence[ScoreT], n: int) -> List[ScoreT]:
    """Sort scores descending and keep the first n.

    The sort is stable, so entries with equal values keep the order in which
    they were produced.

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    ranked = sorted(scores, key=lambda score: score.value, reverse=True)
    return ranked[:n]
