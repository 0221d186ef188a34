"""Data models for the curation engine."""

from .artifact import (
    ARTIFACT_VERSION,
    FEATURE_COUNT,
    FEATURE_NAMES,
    AnalysisResult,
    ModelArtifact,
    TrainingResult,
)
from .config import DEFAULT_CONFIG, CurationConfig, resolve_config
from .feedback import FeedbackRecord, ItemMetadata, Sentiment
from .item import Item, PoolEntry

__all__ = [
    "ARTIFACT_VERSION",
    "AnalysisResult",
    "CurationConfig",
    "DEFAULT_CONFIG",
    "FEATURE_COUNT",
    "FEATURE_NAMES",
    "FeedbackRecord",
    "Item",
    "ItemMetadata",
    "ModelArtifact",
    "PoolEntry",
    "Sentiment",
    "TrainingResult",
    "resolve_config",
]
