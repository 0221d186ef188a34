"""
Feedback pattern mining.

Builds keyword and channel sets for each sentiment from the metadata snapshots
in the feedback store. Patterns are recomputed on every filtering or scoring
batch so they always reflect the store at call time.
"""

from dataclasses import dataclass, field
from typing import Iterable, Set

from curation.models.feedback import FeedbackRecord, Sentiment
from curation.utils.text import extract_keywords


@dataclass
class FeedbackPatterns:
    """Keywords and channel names seen in liked and disliked items."""

    positive_keywords: Set[str] = field(default_factory=set)
    negative_keywords: Set[str] = field(default_factory=set)
    positive_channels: Set[str] = field(default_factory=set)
    negative_channels: Set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not (
            self.positive_keywords
            or self.negative_keywords
            or self.positive_channels
            or self.negative_channels
        )


def mine_patterns(records: Iterable[FeedbackRecord]) -> FeedbackPatterns:
    """Extract keyword and channel sets per sentiment from feedback records."""
    patterns = FeedbackPatterns()
    for record in records:
        if record.sentiment == Sentiment.POSITIVE:
            keywords, channels = patterns.positive_keywords, patterns.positive_channels
        else:
            keywords, channels = patterns.negative_keywords, patterns.negative_channels
        meta = record.metadata
        if meta.title:
            keywords.update(extract_keywords(meta.title))
        if meta.description:
            keywords.update(extract_keywords(meta.description))
        channel = (meta.channel_title or "").strip()
        if channel:
            channels.add(channel)
    return patterns
