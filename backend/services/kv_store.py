"""
Key-value store for the recommendation-model blob.

`set` replaces the value in a single transaction, so a concurrent reader sees
either the previous value or the new one, never a partial write.
"""

from typing import Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from backend.db import KeyValueRow


class KeyValueStore(Protocol):
    """Protocol for durable string values under string keys."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class SqlKeyValueStore:
    """Key-value store backed by the `model_kv` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            return session.scalar(select(KeyValueRow.value).where(KeyValueRow.key == key))

    def set(self, key: str, value: str) -> None:
        with self._session_factory.begin() as session:
            session.merge(KeyValueRow(key=key, value=value))

    def delete(self, key: str) -> None:
        with self._session_factory.begin() as session:
            session.execute(delete(KeyValueRow).where(KeyValueRow.key == key))
