from __future__ import annotations
from typing import Dict, List, Tuple

from redis_table.concurrency.key_locks import SharedExclusiveLock
from redis_table.stores.base import Score


class MemoryOrderedSet:
    """
    In-memory sorted set with ZRANGEBYSCORE semantics:
      - inclusive bounds, filter by score then apply the offset/count window
      - ties ordered by member string (reversed when descending)
    Range : O(N log N)
    Add   : O(1)
    """

    def __init__(self, key: str, lock: SharedExclusiveLock) -> None:
        self.key = key
        self._lock = lock
        self._scores: Dict[str, float] = {}

    def add(self, score: Score, member: str) -> None:
        with self._lock.exclusive():
            self._scores[str(member)] = float(score)

    def remove(self, member: str) -> None:
        with self._lock.exclusive():
            self._scores.pop(str(member), None)

    def _ranked(self, min_score: Score, max_score: Score, descending: bool) -> List[Tuple[str, float]]:
        lo, hi = float(min_score), float(max_score)
        with self._lock.shared():
            hits = [(m, s) for m, s in self._scores.items() if lo <= s <= hi]
        hits.sort(key=lambda t: (t[1], t[0]), reverse=descending)
        return hits

    def range_by_score(
        self,
        min_score: Score,
        max_score: Score,
        offset: int,
        count: int,
        with_scores: bool = False,
        descending: bool = False,
    ) -> List:
        if offset < 0:
            return []
        hits = self._ranked(min_score, max_score, descending)
        window = hits[offset:] if count < 0 else hits[offset:offset + count]
        if with_scores:
            return window
        return [m for m, _ in window]

    def count(self, min_score: Score, max_score: Score) -> int:
        lo, hi = float(min_score), float(max_score)
        with self._lock.shared():
            return sum(1 for s in self._scores.values() if lo <= s <= hi)

    def members(self) -> List[Tuple[str, float]]:
        with self._lock.shared():
            return sorted(self._scores.items(), key=lambda t: (t[1], t[0]))

    def __len__(self) -> int:
        with self._lock.shared():
            return len(self._scores)
