from __future__ import annotations
import math
from typing import List, Tuple

import redis

from redis_table.stores.base import Score
from redis_table.stores.redis.errors import translate_errors


def _bound(v: Score) -> Score | str:
    """Redis spells open bounds as -inf / +inf."""
    if isinstance(v, float) and math.isinf(v):
        return "+inf" if v > 0 else "-inf"
    return v


def _text(v: bytes | str) -> str:
    return v.decode("utf-8") if isinstance(v, bytes) else v


class RedisOrderedSet:
    """
    Redis sorted set used as a secondary index.
    ZRANGEBYSCORE filters by score before LIMIT, so windows apply to matching members only.
    """

    def __init__(self, client: redis.Redis, key: str) -> None:
        self.client = client
        self.key = key

    def add(self, score: Score, member: str) -> None:
        with translate_errors(self.key, "zset"):
            self.client.zadd(self.key, {str(member): score})

    def remove(self, member: str) -> None:
        with translate_errors(self.key, "zset"):
            self.client.zrem(self.key, str(member))

    def range_by_score(
        self,
        min_score: Score,
        max_score: Score,
        offset: int,
        count: int,
        with_scores: bool = False,
        descending: bool = False,
    ) -> List:
        lo, hi = _bound(min_score), _bound(max_score)
        with translate_errors(self.key, "zset"):
            if descending:
                raw = self.client.zrevrangebyscore(
                    self.key, hi, lo, start=offset, num=count, withscores=with_scores
                )
            else:
                raw = self.client.zrangebyscore(
                    self.key, lo, hi, start=offset, num=count, withscores=with_scores
                )
        if with_scores:
            return [(_text(m), float(s)) for m, s in raw]
        return [_text(m) for m in raw]

    def count(self, min_score: Score, max_score: Score) -> int:
        with translate_errors(self.key, "zset"):
            return int(self.client.zcount(self.key, _bound(min_score), _bound(max_score)))

    def members(self) -> List[Tuple[str, float]]:
        with translate_errors(self.key, "zset"):
            raw = self.client.zrange(self.key, 0, -1, withscores=True)
        return [(_text(m), float(s)) for m, s in raw]
