"""
Feedback Store abstraction.

Durable table of user sentiment labels per item id, each with a metadata
snapshot captured at labeling time. At most one record per id: writing a new
sentiment replaces the record in place, removing it returns the item to
"unlabeled". Implementation: SQL (SQLAlchemy), any engine the backend points at.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Protocol, Set, Union

from sqlalchemy import delete, func, select
from sqlalchemy.orm import sessionmaker

from curation.models.feedback import FeedbackRecord, ItemMetadata, Sentiment

from backend.db import FeedbackRow

logger = logging.getLogger(__name__)

SentimentLike = Union[Sentiment, str]


def _require_id(item_id: str) -> str:
    """Ids are opaque and stored as given; blank ids are a usage error."""
    if item_id is None or not str(item_id).strip():
        raise ValueError("item id is required")
    return str(item_id)


class FeedbackStore(Protocol):
    """Protocol for feedback read/write."""

    def upsert(
        self,
        item_id: str,
        sentiment: SentimentLike,
        metadata: Optional[ItemMetadata] = None,
    ) -> FeedbackRecord:
        """Insert or replace the record for item_id. Last write wins for sentiment and metadata."""
        ...

    def remove(self, item_id: str) -> bool:
        """Delete the record if present. Returns True if a row was deleted."""
        ...

    def ids_by_sentiment(self, sentiment: SentimentLike) -> Set[str]:
        ...

    def records_by_sentiment(self, sentiment: SentimentLike) -> List[FeedbackRecord]:
        ...

    def all_records(self) -> List[FeedbackRecord]:
        ...

    def sentiment_of(self, item_id: str) -> Optional[Sentiment]:
        """Sentiment for one id; None when unlabeled."""
        ...

    def sentiment_of_batch(self, item_ids: Iterable[str]) -> Dict[str, Optional[Sentiment]]:
        """Sentiment per id; every requested id is present, None when unlabeled."""
        ...

    def all_labeled_ids(self) -> Set[str]:
        ...


def _row_to_record(row: FeedbackRow) -> FeedbackRecord:
    return FeedbackRecord(
        id=row.id,
        sentiment=Sentiment(row.sentiment),
        metadata=ItemMetadata(
            title=row.title,
            description=row.description,
            channel_title=row.channel_title,
            published_at=row.published_at,
            view_count=row.view_count,
            like_count=row.like_count,
            url=row.url,
        ),
        recorded_at=row.recorded_at,
    )


class SqlFeedbackStore:
    """Feedback store backed by the `feedback` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def upsert(
        self,
        item_id: str,
        sentiment: SentimentLike,
        metadata: Optional[ItemMetadata] = None,
    ) -> FeedbackRecord:
        item_id = _require_id(item_id)
        sentiment = Sentiment.parse(sentiment)
        meta = metadata or ItemMetadata()
        row = FeedbackRow(
            id=item_id,
            sentiment=sentiment.value,
            title=meta.title,
            description=meta.description,
            channel_title=meta.channel_title,
            published_at=meta.published_at,
            view_count=meta.view_count,
            like_count=meta.like_count,
            url=meta.url,
            recorded_at=datetime.now(timezone.utc),
        )
        with self._session_factory.begin() as session:
            merged = session.merge(row)
            session.flush()
            record = _row_to_record(merged)
        logger.info("[feedback] UPSERT id=%s sentiment=%s", item_id, sentiment.value)
        return record

    def like(self, item_id: str, metadata: Optional[ItemMetadata] = None) -> FeedbackRecord:
        return self.upsert(item_id, Sentiment.POSITIVE, metadata)

    def dislike(self, item_id: str, metadata: Optional[ItemMetadata] = None) -> FeedbackRecord:
        return self.upsert(item_id, Sentiment.NEGATIVE, metadata)

    def remove(self, item_id: str) -> bool:
        item_id = _require_id(item_id)
        with self._session_factory.begin() as session:
            result = session.execute(delete(FeedbackRow).where(FeedbackRow.id == item_id))
        deleted = bool(result.rowcount)
        if deleted:
            logger.info("[feedback] REMOVE id=%s", item_id)
        return deleted

    def ids_by_sentiment(self, sentiment: SentimentLike) -> Set[str]:
        sentiment = Sentiment.parse(sentiment)
        with self._session_factory() as session:
            rows = session.scalars(
                select(FeedbackRow.id).where(FeedbackRow.sentiment == sentiment.value)
            )
            return set(rows)

    def records_by_sentiment(self, sentiment: SentimentLike) -> List[FeedbackRecord]:
        sentiment = Sentiment.parse(sentiment)
        with self._session_factory() as session:
            rows = session.scalars(
                select(FeedbackRow)
                .where(FeedbackRow.sentiment == sentiment.value)
                .order_by(FeedbackRow.recorded_at, FeedbackRow.id)
            )
            return [_row_to_record(r) for r in rows]

    def all_records(self) -> List[FeedbackRecord]:
        with self._session_factory() as session:
            rows = session.scalars(
                select(FeedbackRow).order_by(FeedbackRow.recorded_at, FeedbackRow.id)
            )
            return [_row_to_record(r) for r in rows]

    def sentiment_of(self, item_id: str) -> Optional[Sentiment]:
        item_id = _require_id(item_id)
        with self._session_factory() as session:
            value = session.scalar(
                select(FeedbackRow.sentiment).where(FeedbackRow.id == item_id)
            )
        return Sentiment(value) if value else None

    def sentiment_of_batch(self, item_ids: Iterable[str]) -> Dict[str, Optional[Sentiment]]:
        ids = [str(i) for i in item_ids]
        result: Dict[str, Optional[Sentiment]] = {i: None for i in ids}
        lookup = {i for i in ids if i.strip()}
        if not lookup:
            return result
        with self._session_factory() as session:
            rows = session.execute(
                select(FeedbackRow.id, FeedbackRow.sentiment).where(FeedbackRow.id.in_(lookup))
            ).all()
        found = {row_id: Sentiment(value) for row_id, value in rows}
        for i in ids:
            result[i] = found.get(i)
        return result

    def all_labeled_ids(self) -> Set[str]:
        with self._session_factory() as session:
            return set(session.scalars(select(FeedbackRow.id)))

    def counts(self) -> Dict[str, int]:
        """Number of records per sentiment."""
        with self._session_factory() as session:
            rows = session.execute(
                select(FeedbackRow.sentiment, func.count()).group_by(FeedbackRow.sentiment)
            ).all()
        out = {s.value: 0 for s in Sentiment}
        out.update({sentiment: count for sentiment, count in rows})
        return out

    def summary(self, example_limit: int = 10) -> Dict:
        """Counts, example ids, and metadata snapshots per sentiment."""
        positive = self.records_by_sentiment(Sentiment.POSITIVE)
        negative = self.records_by_sentiment(Sentiment.NEGATIVE)
        return {
            "positive_count": len(positive),
            "negative_count": len(negative),
            "positive_examples": [r.id for r in positive[:example_limit]],
            "negative_examples": [r.id for r in negative[:example_limit]],
            "positive_metadata": [r.metadata for r in positive],
            "negative_metadata": [r.metadata for r in negative],
        }
