"""
Shared fixtures: every test gets its own in-memory store.
"""
import pytest

from redis_table.services.table import Table
from redis_table.stores.memory import MemoryStore


class CountingStore(MemoryStore):
    """MemoryStore that records every key it is asked to resolve."""

    def __init__(self) -> None:
        super().__init__()
        self.lookups: list[str] = []

    def get_or_create(self, key, kind):
        self.lookups.append(key)
        return super().get_or_create(key, kind)


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def users(store):
    """Table 'users' indexed on age and score."""
    return Table("users", ["age", "score"], store=store)
