"""
Authenticity filter service: heuristic scoring with patterns from live feedback.

Patterns are mined once per batch from the feedback store, so every call
reflects the store as it is now.
"""

from typing import List, Optional, Sequence

from curation.models.artifact import AnalysisResult
from curation.models.config import CurationConfig, resolve_config
from curation.models.item import Item
from curation.stages.heuristic_filter import analyze_items, filter_by_analysis
from curation.stages.patterns import mine_patterns

from .feedback_store import FeedbackStore


class AuthenticityFilter:
    def __init__(self, feedback_store: FeedbackStore, config: Optional[CurationConfig] = None):
        self._feedback = feedback_store
        self._config = resolve_config(config)

    def analyze(self, items: Sequence[Item], threshold: Optional[float] = None) -> List[AnalysisResult]:
        threshold = self._config.authenticity_threshold if threshold is None else threshold
        patterns = mine_patterns(self._feedback.all_records())
        return analyze_items(items, patterns, threshold)

    def filter(self, items: Sequence[Item], threshold: Optional[float] = None) -> List[Item]:
        """Items whose score is at or above the threshold, in their incoming order."""
        items = list(items)
        return filter_by_analysis(items, self.analyze(items, threshold))
