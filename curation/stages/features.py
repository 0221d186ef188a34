"""
Feature extraction for the recommendation model.

Produces a fixed 10-float vector per item, ordered as FEATURE_NAMES. The first
three features are the heuristic filter's own clickbait, description-quality,
and engagement signals.
"""

from typing import List

from curation.models.artifact import FEATURE_COUNT, FEATURE_NAMES
from curation.models.item import Item
from curation.utils.scores import clamp
from curation.utils.text import keyword_set

from .patterns import FeedbackPatterns
from .signals import description_quality, detect_clickbait, engagement_score, like_ratio_norm

TITLE_LENGTH_SCALE = 100.0
DESCRIPTION_LENGTH_SCALE = 500.0


def extract_features(item: Item, patterns: FeedbackPatterns) -> List[float]:
    """Feature vector for one item given patterns mined from feedback."""
    title = (item.title or "").strip()
    description = (item.description or "").strip()
    channel = (item.channel_title or "").strip()

    keywords = keyword_set(title, description)
    total = max(1, len(keywords))
    positive_overlap = sum(1 for k in keywords if k in patterns.positive_keywords)
    negative_overlap = sum(1 for k in keywords if k in patterns.negative_keywords)

    features = [
        detect_clickbait(title),
        description_quality(description),
        engagement_score(item.view_count, item.like_count),
        min(1.0, len(title) / TITLE_LENGTH_SCALE),
        clamp(positive_overlap / total),
        clamp(negative_overlap / total),
        1.0 if channel and channel in patterns.positive_channels else 0.0,
        1.0 if channel and channel in patterns.negative_channels else 0.0,
        min(1.0, len(description) / DESCRIPTION_LENGTH_SCALE),
        like_ratio_norm(item.view_count, item.like_count),
    ]
    return features


__all__ = ["FEATURE_COUNT", "FEATURE_NAMES", "extract_features"]
