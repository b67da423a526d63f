"""
Redis-backed store for tables.
Resolves keys to typed handles and refuses keys that already hold another type.
"""

from __future__ import annotations
import logging

import redis

from redis_table.core.errors import BackingResourceTypeMismatch
from redis_table.stores.base import ResourceKind
from redis_table.stores.redis.counter import RedisCounter
from redis_table.stores.redis.errors import translate_errors
from redis_table.stores.redis.field_map import RedisFieldMap
from redis_table.stores.redis.ordered_set import RedisOrderedSet

logger = logging.getLogger(__name__)


class RedisStore:
    """
    Redis-based provider of counters, hashes and sorted sets.
    Data survives process restarts.
    """
    _singleton: "RedisStore | None" = None

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        socket_timeout: float | None = None,
        client: redis.Redis | None = None,
    ) -> None:
        self.redis_client = client or redis.from_url(
            redis_url, decode_responses=False, socket_timeout=socket_timeout
        )

    @classmethod
    def instance(cls, redis_url: str = "redis://localhost:6379/0", socket_timeout: float | None = None) -> "RedisStore":
        if not cls._singleton:
            cls._singleton = cls(redis_url, socket_timeout=socket_timeout)
        return cls._singleton

    def _type_of(self, key: str, kind: ResourceKind) -> str:
        with translate_errors(key, kind.value):
            t = self.redis_client.type(key)
        return t.decode("utf-8") if isinstance(t, bytes) else str(t)

    def get_or_create(self, key: str, kind: ResourceKind):
        kind = ResourceKind(kind)
        actual = self._type_of(key, kind)
        if actual not in ("none", kind.value):
            logger.warning(f"Key {key} holds a {actual}, refusing to use it as a {kind.value}")
            raise BackingResourceTypeMismatch(key, kind.value, actual)

        if kind is ResourceKind.COUNTER:
            if actual == "none":
                # NX keeps a counter another client created meanwhile
                with translate_errors(key, kind.value):
                    self.redis_client.set(key, 0, nx=True)
            return RedisCounter(self.redis_client, key)
        # hashes and sorted sets come into existence with their first member
        if kind is ResourceKind.FIELD_MAP:
            return RedisFieldMap(self.redis_client, key)
        return RedisOrderedSet(self.redis_client, key)

    def delete(self, key: str) -> bool:
        with translate_errors(key, "any"):
            return self.redis_client.delete(key) > 0

    def ping(self) -> bool:
        with translate_errors("PING", "any"):
            return bool(self.redis_client.ping())
