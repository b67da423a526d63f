"""
In-memory store for tables.
Same contract as the Redis store; handy for tests and for running without a server.
"""

from __future__ import annotations
import logging
from typing import Dict, Union

from redis_table.concurrency.key_locks import KeyLocks, SharedExclusiveLock
from redis_table.core.errors import BackingResourceTypeMismatch
from redis_table.stores.base import ResourceKind
from redis_table.stores.memory.counter import MemoryCounter
from redis_table.stores.memory.field_map import MemoryFieldMap
from redis_table.stores.memory.ordered_set import MemoryOrderedSet

logger = logging.getLogger(__name__)

Resource = Union[MemoryCounter, MemoryFieldMap, MemoryOrderedSet]

_KINDS = {
    MemoryCounter: ResourceKind.COUNTER,
    MemoryFieldMap: ResourceKind.FIELD_MAP,
    MemoryOrderedSet: ResourceKind.ORDERED_SET,
}


class MemoryStore:
    """
    In-memory keyspace with:
      - Global RW lock for the key -> resource map
      - Per-key RW locks handed to each resource
    """
    _singleton: "MemoryStore | None" = None

    def __init__(self) -> None:
        self._resources: Dict[str, Resource] = {}
        self._global_lock = SharedExclusiveLock()
        self._key_locks = KeyLocks()

    @classmethod
    def instance(cls) -> "MemoryStore":
        if not cls._singleton:
            cls._singleton = cls()
        return cls._singleton

    def _create(self, key: str, kind: ResourceKind) -> Resource:
        lock = self._key_locks.for_key(key)
        if kind is ResourceKind.COUNTER:
            return MemoryCounter(key, lock, initial=0)
        if kind is ResourceKind.FIELD_MAP:
            return MemoryFieldMap(key, lock)
        return MemoryOrderedSet(key, lock)

    def get_or_create(self, key: str, kind: ResourceKind):
        kind = ResourceKind(kind)
        with self._global_lock.shared():
            found = self._resources.get(key)
        if found is None:
            with self._global_lock.exclusive():
                # another thread may have created it in between
                found = self._resources.get(key)
                if found is None:
                    found = self._resources[key] = self._create(key, kind)
        actual = _KINDS[type(found)]
        if actual is not kind:
            logger.warning(f"Key {key} holds a {actual.value}, refusing to use it as a {kind.value}")
            raise BackingResourceTypeMismatch(key, kind.value, actual.value)
        return found

    def delete(self, key: str) -> bool:
        with self._global_lock.exclusive():
            removed = self._resources.pop(key, None)
            self._key_locks.discard(key)
        return removed is not None

    def keys(self, prefix: str = "") -> list[str]:
        with self._global_lock.shared():
            return sorted(k for k in self._resources if k.startswith(prefix))

    def flush(self) -> None:
        with self._global_lock.exclusive():
            for key in list(self._resources):
                self._key_locks.discard(key)
            self._resources.clear()
