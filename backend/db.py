"""SQLAlchemy engine, session factory, and ORM tables: items, feedback, model_kv."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Engine, Index, Integer, String, Text, create_engine, event, make_url
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ItemRow(Base):
    """Pool entry. `seq` is the monotonic admission order used for eviction and recency."""

    __tablename__ = "items"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(Text, nullable=True)
    channel_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_at: Mapped[str | None] = mapped_column(String(64), nullable=True)
    view_count: Mapped[str | None] = mapped_column(String(32), nullable=True)
    like_count: Mapped[str | None] = mapped_column(String(32), nullable=True)
    url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        Index("ix_items_inserted_at", "inserted_at"),
        {"sqlite_autoincrement": True},
    )


class FeedbackRow(Base):
    """One row per item id; upserts replace sentiment and snapshot in place."""

    __tablename__ = "feedback"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    sentiment: Mapped[str] = mapped_column(String(16), nullable=False)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    channel_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_at: Mapped[str | None] = mapped_column(String(64), nullable=True)
    view_count: Mapped[str | None] = mapped_column(String(32), nullable=True)
    like_count: Mapped[str | None] = mapped_column(String(32), nullable=True)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        Index("ix_feedback_sentiment", "sentiment"),
    )


class KeyValueRow(Base):
    """Durable key-value pairs; holds the single recommendation-model blob."""

    __tablename__ = "model_kv"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


SUPPORTED_DIALECTS = ("sqlite", "postgresql")


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_unicode_lower(dbapi_connection, connection_record) -> None:
    # sqlite's built-in lower() only folds ASCII
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def _enable_sqlite_wal(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def ensure_supported_dialect(name: str) -> None:
    """Raise ValueError for backends the pool's insert-ignore cannot target."""
    if name not in SUPPORTED_DIALECTS:
        raise ValueError(
            f"unsupported database backend {name!r}; expected one of {', '.join(SUPPORTED_DIALECTS)}"
        )


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; file-backed sqlite gets WAL so readers never see a half-written row."""
    ensure_supported_dialect(make_url(database_url).get_backend_name())
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        event.listen(engine, "connect", _register_unicode_lower)
        if ":memory:" not in database_url and database_url != "sqlite://":
            event.listen(engine, "connect", _enable_sqlite_wal)
        return engine
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(engine, expire_on_commit=False)


def create_tables(engine: Engine) -> None:
    """Create all tables if they don't exist (idempotent)."""
    Base.metadata.create_all(engine)
