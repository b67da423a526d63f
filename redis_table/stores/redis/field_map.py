from __future__ import annotations
from typing import Iterator, List, Optional, Tuple

import redis

from redis_table.stores.redis.errors import translate_errors


def _text(v: bytes | str) -> str:
    return v.decode("utf-8") if isinstance(v, bytes) else v


class RedisFieldMap:
    """Redis hash: HGET / HMGET / HSET / HDEL, HSCAN for full scans."""

    def __init__(self, client: redis.Redis, key: str) -> None:
        self.client = client
        self.key = key

    def get(self, field: str) -> Optional[bytes]:
        with translate_errors(self.key, "hash"):
            return self.client.hget(self.key, field)

    def multi_get(self, fields: List[str]) -> List[Optional[bytes]]:
        if not fields:
            return []  # HMGET without fields is a syntax error
        with translate_errors(self.key, "hash"):
            return list(self.client.hmget(self.key, fields))

    def set(self, field: str, value: bytes) -> None:
        with translate_errors(self.key, "hash"):
            self.client.hset(self.key, field, value)

    def delete_field(self, field: str) -> None:
        with translate_errors(self.key, "hash"):
            self.client.hdel(self.key, field)

    def items(self) -> Iterator[Tuple[str, bytes]]:
        with translate_errors(self.key, "hash"):
            for field, value in self.client.hscan_iter(self.key):
                yield _text(field), value
