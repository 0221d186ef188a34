"""
Content Pool: durable, size-bounded cache of candidate items.

Serves feeds and searches without calling the external search API. Items are
deduplicated by id (a repeat insert is a no-op, never an update). After every
admission batch the pool is trimmed to `max_pool_size` by deleting the oldest
entries; reads never refresh an entry's age.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session, sessionmaker

from curation.models.config import CurationConfig, resolve_config
from curation.models.item import Item, PoolEntry
from curation.utils.text import normalize_terms

from backend.db import ItemRow

logger = logging.getLogger(__name__)

TITLE_MATCH_POINTS = 2
DESCRIPTION_MATCH_POINTS = 1


class ContentPool(Protocol):
    """Protocol for pool persistence."""

    def insert_many(self, items: Iterable[Item]) -> int:
        """Admit items whose id is not yet pooled, then evict. Returns count newly admitted."""
        ...

    def search_by_terms(self, terms: Iterable[str], limit: int) -> List[PoolEntry]:
        ...

    def random_sample(self, limit: int) -> List[PoolEntry]:
        ...

    def status(self) -> Dict:
        """{"count": int, "most_recent_inserted_at": datetime | None}"""
        ...


def _row_to_entry(row: ItemRow) -> PoolEntry:
    return PoolEntry(
        item=Item(
            id=row.item_id,
            title=row.title or "",
            description=row.description or "",
            thumbnail=row.thumbnail or "",
            channel_title=row.channel_title or "",
            published_at=row.published_at or "",
            view_count=row.view_count,
            like_count=row.like_count,
            url=row.url or "",
        ),
        inserted_at=row.inserted_at,
        seq=row.seq,
    )


def _item_values(item: Item, inserted_at: datetime) -> Dict:
    return {
        "item_id": item.id,
        "title": item.title or "",
        "description": item.description or None,
        "thumbnail": item.thumbnail or None,
        "channel_title": item.channel_title or None,
        "published_at": item.published_at or None,
        "view_count": item.view_count,
        "like_count": item.like_count,
        "url": item.url or "",
        "inserted_at": inserted_at,
    }


def match_score(item: Item, terms: Iterable[str]) -> int:
    """+2 per term found in the title, +1 per term found in the description (case-insensitive)."""
    title = (item.title or "").lower()
    description = (item.description or "").lower()
    score = 0
    for term in terms:
        if term in title:
            score += TITLE_MATCH_POINTS
        if term in description:
            score += DESCRIPTION_MATCH_POINTS
    return score


class SqlContentPool:
    """Content pool backed by the `items` table."""

    def __init__(self, session_factory: sessionmaker, config: Optional[CurationConfig] = None):
        self._session_factory = session_factory
        self._config = resolve_config(config)

    @property
    def max_size(self) -> int:
        return self._config.max_pool_size

    # ------------------------------------------------------------------
    # Admission and eviction
    # ------------------------------------------------------------------

    def _insert_ignore(self, session: Session, values: Dict) -> bool:
        """Insert one row unless its item_id exists. True if a row was written."""
        dialect = session.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise ValueError(f"insert-ignore not supported for dialect {dialect}")
        stmt = insert(ItemRow).values(**values).on_conflict_do_nothing(index_elements=["item_id"])
        return bool(session.execute(stmt).rowcount)

    def _evict(self, session: Session) -> int:
        """Delete everything older than the newest `max_size` entries."""
        cutoff = session.scalar(
            select(ItemRow.seq)
            .order_by(ItemRow.seq.desc())
            .offset(self.max_size - 1)
            .limit(1)
        )
        if cutoff is None:
            return 0
        result = session.execute(delete(ItemRow).where(ItemRow.seq < cutoff))
        return result.rowcount or 0

    def insert_many(self, items: Iterable[Item]) -> int:
        items = [i for i in items if i.id and i.id.strip()]
        if not items:
            return 0
        added = 0
        with self._session_factory.begin() as session:
            for item in items:
                if self._insert_ignore(session, _item_values(item, datetime.now(timezone.utc))):
                    added += 1
            evicted = self._evict(session)
        logger.info(
            "[pool] INSERT_BATCH received=%s added=%s evicted=%s", len(items), added, evicted
        )
        return added

    def add(self, items: Iterable[Item]) -> Dict[str, int]:
        """Insert a batch and report {"added": n, "total": pool count}."""
        added = self.insert_many(items)
        return {"added": added, "total": self.count()}

    def replace_all(self, items: Iterable[Item]) -> int:
        """Delete every entry, then admit the batch (still bounded by max_size)."""
        with self._session_factory.begin() as session:
            session.execute(delete(ItemRow))
        logger.info("[pool] CLEARED")
        return self.insert_many(items)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(ItemRow)) or 0

    def newest(self, limit: int) -> List[PoolEntry]:
        """The `limit` most recently inserted entries, newest first."""
        if limit <= 0:
            return []
        with self._session_factory() as session:
            rows = session.scalars(select(ItemRow).order_by(ItemRow.seq.desc()).limit(limit))
            return [_row_to_entry(r) for r in rows]

    def read_all(self) -> List[PoolEntry]:
        """Every entry, newest first."""
        with self._session_factory() as session:
            rows = session.scalars(select(ItemRow).order_by(ItemRow.seq.desc()))
            return [_row_to_entry(r) for r in rows]

    def get(self, item_id: str) -> Optional[PoolEntry]:
        with self._session_factory() as session:
            row = session.scalar(select(ItemRow).where(ItemRow.item_id == item_id))
            return _row_to_entry(row) if row else None

    def search_by_terms(self, terms: Iterable[str], limit: int) -> List[PoolEntry]:
        """
        Entries whose title or description contains any term (case-insensitive),
        best match first. Terms shorter than the minimum length are dropped;
        with no terms left, the newest `limit` entries are returned instead.
        """
        terms = normalize_terms(terms, self._config.min_search_term_length)
        if limit <= 0:
            return []
        if not terms:
            return self.newest(limit)
        conditions = []
        for term in terms:
            conditions.append(ItemRow.title.icontains(term, autoescape=True))
            conditions.append(ItemRow.description.icontains(term, autoescape=True))
        with self._session_factory() as session:
            rows = session.scalars(
                select(ItemRow).where(or_(*conditions)).order_by(ItemRow.seq)
            )
            entries = [_row_to_entry(r) for r in rows]
        scored: List[Tuple[PoolEntry, int]] = [(e, match_score(e.item, terms)) for e in entries]
        scored.sort(key=lambda p: p[1], reverse=True)
        return [e for e, _ in scored[:limit]]

    def random_sample(self, limit: int) -> List[PoolEntry]:
        if limit <= 0:
            return []
        with self._session_factory() as session:
            rows = session.scalars(select(ItemRow).order_by(func.random()).limit(limit))
            return [_row_to_entry(r) for r in rows]

    def status(self) -> Dict:
        with self._session_factory() as session:
            count = session.scalar(select(func.count()).select_from(ItemRow)) or 0
            latest = session.scalar(
                select(ItemRow.inserted_at).order_by(ItemRow.seq.desc()).limit(1)
            )
        return {"count": count, "most_recent_inserted_at": latest if count else None}
