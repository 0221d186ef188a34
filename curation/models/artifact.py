"""
Recommendation model artifact and result types.

ModelArtifact is the single persisted blob (JSON) holding the trained
logistic-regression weights. Validation rejects blobs with a different schema
version or a weight vector that does not match the feature list, so a corrupt
or outdated artifact reads as "no model".
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

ARTIFACT_VERSION = 1

# Positional order of the model inputs; weights[i] multiplies feature FEATURE_NAMES[i].
FEATURE_NAMES: List[str] = [
    "clickbait",
    "description_quality",
    "engagement",
    "title_length_norm",
    "positive_keyword_overlap",
    "negative_keyword_overlap",
    "positive_channel_match",
    "negative_channel_match",
    "description_length_norm",
    "engagement_like_ratio",
]
FEATURE_COUNT = len(FEATURE_NAMES)


class ModelArtifact(BaseModel):
    """Trained weights, aligned positionally with FEATURE_NAMES."""

    version: int = ARTIFACT_VERSION
    weights: List[float]
    bias: float
    feature_names: List[str] = Field(default_factory=lambda: list(FEATURE_NAMES))
    trained_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    positive_count: int = 0
    negative_count: int = 0

    @field_validator("version")
    @classmethod
    def _known_version(cls, value: int) -> int:
        if value != ARTIFACT_VERSION:
            raise ValueError(f"unsupported artifact version {value}")
        return value

    @field_validator("weights")
    @classmethod
    def _weights_match_features(cls, value: List[float]) -> List[float]:
        if len(value) != FEATURE_COUNT:
            raise ValueError(f"expected {FEATURE_COUNT} weights, got {len(value)}")
        return value


class TrainingResult(BaseModel):
    success: bool
    message: str
    positive_count: int
    negative_count: int


class AnalysisResult(BaseModel):
    """Heuristic filter verdict for one item."""

    item_id: str
    is_authentic: bool
    score: float
    reasoning: Optional[str] = None
