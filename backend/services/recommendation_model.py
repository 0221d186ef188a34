"""
Recommendation model: train, persist, cache, and score.

Training reads every feedback record, mines patterns from that same set,
extracts one feature vector per record (label 1 for positive, 0 for negative),
and fits a logistic regression. The resulting ModelArtifact replaces the stored
blob in one write, and the in-memory cache is invalidated before train()
returns so the next read sees the new artifact.

Scoring returns None when no valid artifact exists; callers pick their own
neutral default.
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence

from pydantic import ValidationError

from curation.models.artifact import FEATURE_NAMES, ModelArtifact, TrainingResult
from curation.models.config import CurationConfig, resolve_config
from curation.models.feedback import FeedbackRecord, Sentiment
from curation.models.item import Item
from curation.stages.features import extract_features
from curation.stages.patterns import FeedbackPatterns, mine_patterns
from curation.stages.training import fit_logistic_regression, predict_probability

from .feedback_store import FeedbackStore
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

MODEL_KEY = "recommendation_model"


class ArtifactCache:
    """
    Process-wide slot for the loaded artifact.

    Populated lazily by get_or_load; cleared by invalidate after every
    successful training run. Only valid artifacts are cached.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._artifact: Optional[ModelArtifact] = None

    def get_or_load(self, loader: Callable[[], Optional[ModelArtifact]]) -> Optional[ModelArtifact]:
        with self._lock:
            if self._artifact is None:
                self._artifact = loader()
            return self._artifact

    def invalidate(self) -> None:
        with self._lock:
            self._artifact = None

    @property
    def is_populated(self) -> bool:
        return self._artifact is not None


class RecommendationModel:
    """Logistic-regression preference model over feedback-derived features."""

    def __init__(
        self,
        feedback_store: FeedbackStore,
        kv_store: KeyValueStore,
        config: Optional[CurationConfig] = None,
        cache: Optional[ArtifactCache] = None,
    ):
        self._feedback = feedback_store
        self._kv = kv_store
        self._config = resolve_config(config)
        self.cache = cache if cache is not None else ArtifactCache()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _read_artifact(self) -> Optional[ModelArtifact]:
        raw = self._kv.get(MODEL_KEY)
        if not raw:
            return None
        try:
            return ModelArtifact.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "[model] ARTIFACT_INVALID key=%s errors=%s", MODEL_KEY, e.error_count()
            )
            return None

    def load(self) -> Optional[ModelArtifact]:
        """Return the stored artifact (cached after the first successful load), or None."""
        return self.cache.get_or_load(self._read_artifact)

    def is_available(self) -> bool:
        """True iff a structurally valid artifact is persisted."""
        return self.load() is not None

    def invalidate(self) -> None:
        self.cache.invalidate()

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self) -> TrainingResult:
        """
        Fit the model on all current feedback.

        Needs at least min_positive_samples positive and min_negative_samples
        negative records; otherwise returns success=False and leaves any stored
        artifact untouched.
        """
        records = self._feedback.all_records()
        positive = [r for r in records if r.sentiment == Sentiment.POSITIVE]
        negative = [r for r in records if r.sentiment == Sentiment.NEGATIVE]
        pos_n, neg_n = len(positive), len(negative)

        min_pos = self._config.min_positive_samples
        min_neg = self._config.min_negative_samples
        if pos_n < min_pos or neg_n < min_neg:
            logger.info("[model] TRAIN_SKIPPED positive=%s negative=%s", pos_n, neg_n)
            return TrainingResult(
                success=False,
                message=(
                    f"Need at least {min_pos} positive and {min_neg} negative feedback samples "
                    f"to train. You have {pos_n} positive and {neg_n} negative."
                ),
                positive_count=pos_n,
                negative_count=neg_n,
            )

        patterns = mine_patterns(records)
        labeled: List[FeedbackRecord] = positive + negative
        features = [extract_features(r.as_item(), patterns) for r in labeled]
        labels = [1] * pos_n + [0] * neg_n
        weights, bias = fit_logistic_regression(features, labels, self._config)

        artifact = ModelArtifact(
            weights=weights,
            bias=bias,
            feature_names=list(FEATURE_NAMES),
            positive_count=pos_n,
            negative_count=neg_n,
        )
        self._kv.set(MODEL_KEY, artifact.model_dump_json())
        self.cache.invalidate()
        logger.info("[model] TRAINED positive=%s negative=%s bias=%.4f", pos_n, neg_n, bias)
        return TrainingResult(
            success=True,
            message=f"Model trained on {pos_n} positive and {neg_n} negative samples.",
            positive_count=pos_n,
            negative_count=neg_n,
        )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _current_patterns(self) -> FeedbackPatterns:
        return mine_patterns(self._feedback.all_records())

    def score(self, item: Item) -> Optional[float]:
        """Predicted like probability in [0, 1], or None when no model is stored."""
        return self.score_many([item])[0]

    def score_many(self, items: Sequence[Item]) -> List[Optional[float]]:
        """Score a batch against one artifact load and one pattern-mining pass."""
        artifact = self.load()
        if artifact is None:
            return [None] * len(items)
        if not items:
            return []
        patterns = self._current_patterns()
        return [
            predict_probability(artifact.weights, artifact.bias, extract_features(item, patterns))
            for item in items
        ]
