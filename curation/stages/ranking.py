"""
Rank items by recommendation-model score.

Items the model could not score get the neutral default. The sort is stable, so
ties keep their incoming relative order.
"""

from typing import List, Optional, Sequence, Tuple

from curation.models.item import Item

NEUTRAL_SCORE = 0.5


def rank_by_scores(
    items: Sequence[Item],
    scores: Sequence[Optional[float]],
    default: float = NEUTRAL_SCORE,
) -> List[Tuple[Item, float]]:
    """Pair items with their scores (None -> default) and sort descending, stable."""
    if len(items) != len(scores):
        raise ValueError(f"{len(items)} items but {len(scores)} scores")
    paired = [
        (item, default if score is None else score)
        for item, score in zip(items, scores)
    ]
    paired.sort(key=lambda p: p[1], reverse=True)
    return paired
