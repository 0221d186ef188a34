"""
Content curation engine: heuristic filtering and a learned preference model.

Single entry point for the curation package:
- models/: Item, FeedbackRecord, ModelArtifact, CurationConfig
- stages/: signals, patterns, heuristic_filter, features, training, ranking
- utils/: keyword extraction, search tokenization, clamp/sigmoid helpers

Everything here is pure; persistence and orchestration live in `backend`.
"""

from curation.models import (
    DEFAULT_CONFIG,
    FEATURE_COUNT,
    FEATURE_NAMES,
    AnalysisResult,
    CurationConfig,
    FeedbackRecord,
    Item,
    ItemMetadata,
    ModelArtifact,
    PoolEntry,
    Sentiment,
    TrainingResult,
    resolve_config,
)
from curation.stages import (
    FeedbackPatterns,
    analyze_item,
    extract_features,
    filter_by_analysis,
    fit_logistic_regression,
    mine_patterns,
    predict_probability,
    rank_by_scores,
    score_item,
)

__all__ = [
    "AnalysisResult",
    "CurationConfig",
    "DEFAULT_CONFIG",
    "FEATURE_COUNT",
    "FEATURE_NAMES",
    "FeedbackPatterns",
    "FeedbackRecord",
    "Item",
    "ItemMetadata",
    "ModelArtifact",
    "PoolEntry",
    "Sentiment",
    "TrainingResult",
    "analyze_item",
    "extract_features",
    "filter_by_analysis",
    "fit_logistic_regression",
    "mine_patterns",
    "predict_probability",
    "rank_by_scores",
    "resolve_config",
    "score_item",
]
