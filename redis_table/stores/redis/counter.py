from __future__ import annotations

import redis

from redis_table.stores.redis.errors import translate_errors


class RedisCounter:
    """Integer string key advanced with INCR, which Redis executes atomically."""

    def __init__(self, client: redis.Redis, key: str) -> None:
        self.client = client
        self.key = key

    def increment(self) -> int:
        with translate_errors(self.key, "string"):
            return int(self.client.incr(self.key))
