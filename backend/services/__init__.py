"""Backing logic: stores, the recommendation model, and the filter & rank pipeline."""

from .authenticity_filter import AuthenticityFilter
from .content_pool import ContentPool, SqlContentPool, match_score
from .feed_service import FeedService
from .feedback_store import FeedbackStore, SqlFeedbackStore
from .kv_store import KeyValueStore, SqlKeyValueStore
from .pipeline import FilterRankPipeline, PipelineRun, StepResult, best_effort
from .recommendation_model import MODEL_KEY, ArtifactCache, RecommendationModel

__all__ = [
    "ArtifactCache",
    "AuthenticityFilter",
    "ContentPool",
    "FeedService",
    "FeedbackStore",
    "FilterRankPipeline",
    "KeyValueStore",
    "MODEL_KEY",
    "PipelineRun",
    "RecommendationModel",
    "SqlContentPool",
    "SqlFeedbackStore",
    "SqlKeyValueStore",
    "StepResult",
    "best_effort",
    "match_score",
]
