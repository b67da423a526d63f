"""
Redis store package.
"""

from .counter import RedisCounter
from .field_map import RedisFieldMap
from .ordered_set import RedisOrderedSet
from .store import RedisStore

__all__ = ["RedisCounter", "RedisFieldMap", "RedisOrderedSet", "RedisStore"]
