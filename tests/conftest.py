"""
Test configuration and fixtures for the URL shortener.
This centralizes all test setup, making individual tests clean.
"""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from shortener_service.app_factory import create_app
from shortener_service.config import Settings
from shortener_service.exceptions import StoreBackendError
from shortener_service.schemas.url import UrlMapping
from shortener_service.store import InMemoryMappingStore, MappingStore, SQLAlchemyMappingStore
from shortener_service.database import create_db_engine

BASE_URL = "http://sho.rt"


class FailingStore(MappingStore):
    """Store whose backend is always down"""

    def __init__(self):
        self.calls = 0

    async def save(self, short_code: str, original_url: str) -> None:
        self.calls += 1
        raise StoreBackendError("connection refused")

    async def find(self, short_code: str) -> Optional[UrlMapping]:
        self.calls += 1
        raise StoreBackendError("connection refused")


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file"""
    return Settings(
        base_url=BASE_URL,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        store_backend="sqlalchemy",
        _env_file=None,
    )


@pytest.fixture
def memory_store():
    return InMemoryMappingStore()


@pytest.fixture
def sql_store(settings):
    """
    SQLAlchemy store on a fresh database file.
    The schema is created by the tests that need it.
    """
    store = SQLAlchemyMappingStore(create_db_engine(settings))
    yield store
    store.engine.dispose()


def _client_for(settings: Settings, store: Optional[MappingStore]):
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client(settings, memory_store):
    """
    Test client backed by the in-memory store.
    This is the main fixture that tests will use.
    """
    yield from _client_for(settings, memory_store)


@pytest.fixture
def sql_client(settings):
    """Test client with the configured SQLAlchemy store (schema created on startup)"""
    yield from _client_for(settings, None)


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def failing_client(settings, failing_store):
    yield from _client_for(settings, failing_store)
