import pytest
from fastapi.testclient import TestClient

from query_tracker_api.app.core.config import Settings
from query_tracker_api.app.core.db import QueryStore
from query_tracker_api.app.main import create_app

from .fakes import InMemoryQueryStore


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "query_tracker.db"), log_level="WARNING", seed_demo_data=False)


@pytest.fixture
def store(settings):
    store = QueryStore(settings.database_url)
    store.connect()
    yield store
    store.close()


@pytest.fixture
def form_data(store):
    return store.insert_form_data("Is X present?", "Yes")


@pytest.fixture
def client(settings, store):
    app = create_app(settings=settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def memory_store():
    store = InMemoryQueryStore()
    store.connect()
    return store


@pytest.fixture
def memory_client(settings, memory_store):
    app = create_app(settings=settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client
