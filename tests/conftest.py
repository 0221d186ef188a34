"""Shared fixtures: a fresh sqlite-backed AppState per test and an item factory."""

import pytest

from backend.config import BackendConfig
from backend.state import AppState
from curation.models.config import CurationConfig
from curation.models.item import Item


@pytest.fixture
def curation_config():
    return CurationConfig(max_pool_size=50)


@pytest.fixture
def backend_config(tmp_path, curation_config):
    return BackendConfig(
        database_url=f"sqlite:///{tmp_path / 'curator.db'}",
        curation=curation_config,
    )


@pytest.fixture
def state(backend_config):
    app_state = AppState(backend_config)
    yield app_state
    app_state.close()


@pytest.fixture
def make_item():
    def _make(item_id: str, **fields) -> Item:
        data = {
            "title": f"Item {item_id} about nothing much",
            "url": f"https://example.com/watch?v={item_id}",
        }
        data.update(fields)
        return Item(id=item_id, **data)

    return _make
