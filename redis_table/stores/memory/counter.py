from __future__ import annotations

from redis_table.concurrency.key_locks import SharedExclusiveLock


class MemoryCounter:
    """In-memory counterpart of a Redis integer incremented with INCR."""

    def __init__(self, key: str, lock: SharedExclusiveLock, initial: int = 0) -> None:
        self.key = key
        self._lock = lock
        self._value = initial

    def increment(self) -> int:
        with self._lock.exclusive():
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock.shared():
            return self._value
