"""Pipeline stages: quality signals, pattern mining, heuristic filter, features, training, ranking."""

from .features import FEATURE_COUNT, FEATURE_NAMES, extract_features
from .heuristic_filter import (
    analyze_item,
    analyze_items,
    count_pattern_matches,
    filter_by_analysis,
    is_authentic,
    score_item,
)
from .patterns import FeedbackPatterns, mine_patterns
from .ranking import NEUTRAL_SCORE, rank_by_scores
from .signals import description_quality, detect_clickbait, engagement_score, like_ratio_norm
from .training import fit_logistic_regression, log_likelihood, predict_probability

__all__ = [
    "FEATURE_COUNT",
    "FEATURE_NAMES",
    "FeedbackPatterns",
    "NEUTRAL_SCORE",
    "analyze_item",
    "analyze_items",
    "count_pattern_matches",
    "description_quality",
    "detect_clickbait",
    "engagement_score",
    "extract_features",
    "filter_by_analysis",
    "fit_logistic_regression",
    "is_authentic",
    "like_ratio_norm",
    "log_likelihood",
    "mine_patterns",
    "predict_probability",
    "rank_by_scores",
    "score_item",
]
