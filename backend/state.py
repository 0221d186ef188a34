"""Application state: engine, stores, model, and services wired to one database."""

import logging
from typing import Optional

from sqlalchemy import Engine

from .config import BackendConfig, get_config
from .db import create_tables, ensure_supported_dialect, make_engine, make_session_factory
from .services import (
    ArtifactCache,
    AuthenticityFilter,
    FeedService,
    FilterRankPipeline,
    RecommendationModel,
    SqlContentPool,
    SqlFeedbackStore,
    SqlKeyValueStore,
)

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(self, config: BackendConfig, engine: Optional[Engine] = None):
        self.config = config
        curation = config.curation

        self.engine = engine if engine is not None else make_engine(config.database_url, config.sql_echo)
        ensure_supported_dialect(self.engine.dialect.name)
        create_tables(self.engine)
        self.session_factory = make_session_factory(self.engine)

        # Stores
        self.feedback_store = SqlFeedbackStore(self.session_factory)
        self.content_pool = SqlContentPool(self.session_factory, curation)
        self.kv_store = SqlKeyValueStore(self.session_factory)

        # Model and services
        self.model = RecommendationModel(
            self.feedback_store, self.kv_store, curation, cache=ArtifactCache()
        )
        self.authenticity_filter = AuthenticityFilter(self.feedback_store, curation)
        self.pipeline = FilterRankPipeline(
            self.feedback_store, self.authenticity_filter, self.model, curation
        )
        self.feed = FeedService(self.content_pool, self.pipeline, curation)

        logger.info("[startup] DATABASE url=%s", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self.engine.dispose()


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def reset_state() -> None:
    """Dispose the global state; the next get_state() rebuilds it."""
    global _state
    if _state is not None:
        _state.close()
    _state = None
