from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Tuple

from redis_table.concurrency.key_locks import SharedExclusiveLock


class MemoryFieldMap:
    """
    In-memory hash.
    Values are kept as bytes so callers see exactly what the Redis backend returns.
    """

    def __init__(self, key: str, lock: SharedExclusiveLock) -> None:
        self.key = key
        self._lock = lock
        self._fields: Dict[str, bytes] = {}

    def get(self, field: str) -> Optional[bytes]:
        with self._lock.shared():
            return self._fields.get(field)

    def multi_get(self, fields: List[str]) -> List[Optional[bytes]]:
        with self._lock.shared():
            return [self._fields.get(f) for f in fields]

    def set(self, field: str, value: bytes) -> None:
        if isinstance(value, str):
            value = value.encode("utf-8")
        with self._lock.exclusive():
            self._fields[field] = bytes(value)

    def delete_field(self, field: str) -> None:
        with self._lock.exclusive():
            self._fields.pop(field, None)

    def items(self) -> Iterator[Tuple[str, bytes]]:
        # snapshot; writers are not blocked while the caller iterates
        with self._lock.shared():
            snapshot = list(self._fields.items())
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock.shared():
            return len(self._fields)
