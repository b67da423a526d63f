# redis_table/concurrency/key_locks.py
import threading
from contextlib import contextmanager
from typing import Dict


class SharedExclusiveLock:
    """
    Readers-writer lock guarding one in-memory resource.
    - Any number of readers may hold it together.
    - A writer waits for readers to drain and blocks newcomers while waiting.
    """
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._active_readers = 0
        self._writing = False
        self._queued_writers = 0

    @contextmanager
    def shared(self):
        with self._cond:
            self._cond.wait_for(lambda: not self._writing and self._queued_writers == 0)
            self._active_readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._active_readers -= 1
                if not self._active_readers:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self):
        with self._cond:
            self._queued_writers += 1
            try:
                self._cond.wait_for(lambda: not self._writing and self._active_readers == 0)
            finally:
                self._queued_writers -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class KeyLocks:
    """One SharedExclusiveLock per key, created on first use."""
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, SharedExclusiveLock] = {}

    def for_key(self, key: str) -> SharedExclusiveLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = SharedExclusiveLock()
            return lock

    def discard(self, key: str) -> None:
        with self._guard:
            self._locks.pop(key, None)
