"""
Filter & rank pipeline: shared by the feed, pool search, and any caller with candidates.

Steps, in order:
1. exclude: drop every candidate with a feedback record (either sentiment)
2. filter (optional): keep candidates whose heuristic score >= threshold
3. truncate to max_results
4. rank (when a model is available): stable sort by model score, unscored -> 0.5

Steps 1, 2 and 4 run through best_effort: when a step raises, the failure is
logged and recorded, and the step's input passes through unchanged. Truncation
happens before ranking, so ranking never promotes an item from beyond
max_results.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from curation.models.config import CurationConfig, resolve_config
from curation.models.item import Item
from curation.stages.ranking import NEUTRAL_SCORE, rank_by_scores

from .authenticity_filter import AuthenticityFilter
from .feedback_store import FeedbackStore
from .recommendation_model import RecommendationModel

logger = logging.getLogger(__name__)

Step = Callable[[List[Item]], List[Item]]


@dataclass
class StepResult:
    """Outcome of one pipeline step: its output, or its input plus the error that stopped it."""

    items: List[Item]
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def best_effort(name: str, step: Step, items: List[Item]) -> StepResult:
    """Run a step; on failure log it and pass the input through unchanged."""
    try:
        return StepResult(items=step(list(items)))
    except Exception as e:
        logger.warning("[pipeline] STEP_SKIPPED step=%s error=%r", name, e)
        return StepResult(items=list(items), error=e)


@dataclass
class PipelineRun:
    items: List[Item]
    skipped_steps: List[str] = field(default_factory=list)
    scores: Optional[List[float]] = None


class FilterRankPipeline:
    def __init__(
        self,
        feedback_store: FeedbackStore,
        authenticity_filter: AuthenticityFilter,
        model: RecommendationModel,
        config: Optional[CurationConfig] = None,
    ):
        self._feedback = feedback_store
        self._filter = authenticity_filter
        self._model = model
        self._config = resolve_config(config)

    def _exclude_labeled(self, items: List[Item]) -> List[Item]:
        labeled = self._feedback.all_labeled_ids()
        return [item for item in items if item.id not in labeled]

    def run(
        self,
        candidates: Sequence[Item],
        max_results: int,
        use_heuristic_filter: bool = False,
        threshold: Optional[float] = None,
    ) -> PipelineRun:
        if max_results < 0:
            raise ValueError(f"max_results must be >= 0, got {max_results}")
        threshold = self._config.authenticity_threshold if threshold is None else threshold
        items = list(candidates)
        skipped: List[str] = []

        result = best_effort("exclude", self._exclude_labeled, items)
        if not result.ok:
            skipped.append("exclude")
        items = result.items

        if use_heuristic_filter and items:
            result = best_effort(
                "filter", lambda batch: self._filter.filter(batch, threshold), items
            )
            if not result.ok:
                skipped.append("filter")
            items = result.items

        items = items[:max_results]

        scores: Optional[List[float]] = None
        ranked_scores: List[float] = []

        def _rank(batch: List[Item]) -> List[Item]:
            if not batch or not self._model.is_available():
                return batch
            ranked = rank_by_scores(batch, self._model.score_many(batch), NEUTRAL_SCORE)
            ranked_scores.extend(score for _, score in ranked)
            return [item for item, _ in ranked]

        result = best_effort("rank", _rank, items)
        if not result.ok:
            skipped.append("rank")
        elif ranked_scores:
            scores = ranked_scores
        items = result.items

        logger.debug(
            "[pipeline] DONE candidates=%s returned=%s skipped=%s",
            len(candidates), len(items), skipped,
        )
        return PipelineRun(items=items, skipped_steps=skipped, scores=scores)

    def apply_filters_and_rank(
        self,
        candidates: Sequence[Item],
        max_results: int,
        use_heuristic_filter: bool = False,
        threshold: Optional[float] = None,
    ) -> List[Item]:
        """Ordered items after exclusion, optional filtering, truncation, and ranking."""
        return self.run(candidates, max_results, use_heuristic_filter, threshold).items
