"""
Tests for the mapping store contract, run against both implementations.
"""
import asyncio

import pytest

from shortener_service.exceptions import StoreBackendError, StoreConflictError
from shortener_service.schemas.url import UrlMapping
from shortener_service.store import InMemoryMappingStore, StoreBackend, StoreFactory, SQLAlchemyMappingStore


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request, memory_store, sql_store):
    """Each test runs once per backend"""
    if request.param == "memory":
        return memory_store
    asyncio.run(sql_store.create_schema())
    return sql_store


class TestMappingStore:
    """Behavior shared by every store"""

    def test_save_and_find(self, store):
        asyncio.run(store.save("abcd1234", "https://example.com/a/b"))

        mapping = asyncio.run(store.find("abcd1234"))
        assert mapping == UrlMapping(short_code="abcd1234", original_url="https://example.com/a/b")

    def test_find_unknown_code(self, store):
        assert asyncio.run(store.find("missing0")) is None

    def test_duplicate_code_conflicts(self, store):
        """Write-once: the second save fails and the first URL stays"""
        asyncio.run(store.save("abcd1234", "https://first.example.com"))

        with pytest.raises(StoreConflictError) as exc_info:
            asyncio.run(store.save("abcd1234", "https://second.example.com"))
        assert exc_info.value.short_code == "abcd1234"

        mapping = asyncio.run(store.find("abcd1234"))
        assert mapping.original_url == "https://first.example.com"

    def test_same_url_under_different_codes(self, store):
        asyncio.run(store.save("aaaaaaaa", "https://example.com"))
        asyncio.run(store.save("bbbbbbbb", "https://example.com"))

        assert asyncio.run(store.find("aaaaaaaa")).original_url == "https://example.com"
        assert asyncio.run(store.find("bbbbbbbb")).original_url == "https://example.com"

    def test_long_url_kept_exactly(self, store):
        long_url = "https://example.com/" + "x" * 5000 + "?q=é"
        asyncio.run(store.save("abcd1234", long_url))
        assert asyncio.run(store.find("abcd1234")).original_url == long_url

    def test_find_is_read_only(self, store):
        asyncio.run(store.save("abcd1234", "https://example.com"))
        first = asyncio.run(store.find("abcd1234"))
        second = asyncio.run(store.find("abcd1234"))
        assert first == second


class TestSQLAlchemyStoreFailures:
    """Persistence errors become StoreBackendError, never conflict or absence"""

    def test_find_without_table(self, sql_store):
        with pytest.raises(StoreBackendError):
            asyncio.run(sql_store.find("abcd1234"))

    def test_save_without_table(self, sql_store):
        with pytest.raises(StoreBackendError):
            asyncio.run(sql_store.save("abcd1234", "https://example.com"))


class TestConcurrentSaves:
    """Racing writers on one code: exactly one wins"""

    def test_only_one_writer_wins(self, memory_store):
        async def race():
            return await asyncio.gather(
                *(memory_store.save("abcd1234", f"https://example.com/{i}") for i in range(10)),
                return_exceptions=True
            )

        results = asyncio.run(race())
        successes = [r for r in results if r is None]
        conflicts = [r for r in results if isinstance(r, StoreConflictError)]
        assert len(successes) == 1
        assert len(conflicts) == 9
        assert asyncio.run(memory_store.find("abcd1234")).original_url == "https://example.com/0"


class TestStoreFactory:
    """Test store factory"""

    def test_creates_memory_store(self, settings):
        store = StoreFactory.create(StoreBackend.MEMORY, settings)
        assert isinstance(store, InMemoryMappingStore)

    def test_creates_sqlalchemy_store(self, settings):
        store = StoreFactory.create(StoreBackend.SQLALCHEMY, settings)
        assert isinstance(store, SQLAlchemyMappingStore)
        asyncio.run(store.close())

    def test_unknown_backend(self, settings):
        with pytest.raises(ValueError):
            StoreBackend("mongodb")
