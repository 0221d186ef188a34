"""
Feed service: pool-backed feeds and searches, no external API calls.

- random_recommendations: sample the pool, then filter & rank
- search_pool: free-text search over titles and descriptions
- search_recommendations: search results run through filter & rank

The heuristic filter is opt-in (use_heuristic_filter=True); by default feeds
only exclude labeled items and rank.
"""

from typing import Dict, Iterable, List, Optional

from curation.models.config import CurationConfig, resolve_config
from curation.models.item import Item
from curation.utils.text import search_terms

from .content_pool import SqlContentPool
from .pipeline import FilterRankPipeline


class FeedService:
    def __init__(
        self,
        pool: SqlContentPool,
        pipeline: FilterRankPipeline,
        config: Optional[CurationConfig] = None,
    ):
        self._pool = pool
        self._pipeline = pipeline
        self._config = resolve_config(config)

    def add_to_pool(self, items: Iterable[Item]) -> Dict[str, int]:
        """Admit a batch from the search client; {"added": n, "total": count}."""
        return self._pool.add(items)

    def pool_status(self) -> Dict:
        return self._pool.status()

    def random_recommendations(
        self,
        limit: int,
        use_heuristic_filter: bool = False,
        threshold: Optional[float] = None,
    ) -> List[Item]:
        """Up to `limit` unlabeled items sampled from the pool, best first when a model exists."""
        if limit <= 0:
            return []
        candidate_limit = min(
            limit * self._config.feed_candidate_multiplier, self._config.feed_candidate_cap
        )
        candidates = [e.item for e in self._pool.random_sample(candidate_limit)]
        if not candidates:
            return []
        return self._pipeline.apply_filters_and_rank(
            candidates, limit, use_heuristic_filter, threshold
        )

    def search_pool(self, query: str, limit: int) -> List[Item]:
        """Pool entries matching any query word, best match first; newest entries for an empty query."""
        terms = search_terms(query, self._config.min_search_term_length)
        return [e.item for e in self._pool.search_by_terms(terms, limit)]

    def search_recommendations(
        self,
        query: str,
        limit: int,
        use_heuristic_filter: bool = False,
        threshold: Optional[float] = None,
    ) -> List[Item]:
        if limit <= 0:
            return []
        candidate_limit = min(
            limit * self._config.feed_candidate_multiplier, self._config.feed_candidate_cap
        )
        candidates = self.search_pool(query, candidate_limit)
        return self._pipeline.apply_filters_and_rank(
            candidates, limit, use_heuristic_filter, threshold
        )
