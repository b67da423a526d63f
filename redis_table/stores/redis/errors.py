"""
Maps redis-py exceptions onto the table error model.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager

import redis

from redis_table.core.errors import BackingResourceTypeMismatch, TransientStoreFailure

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(key: str, expected: str):
    """
    Re-raise connection/timeout failures as TransientStoreFailure and
    WRONGTYPE replies as BackingResourceTypeMismatch. Anything else passes through.
    """
    try:
        yield
    except (redis.ConnectionError, redis.TimeoutError) as e:
        logger.warning(f"Redis unavailable while accessing {key}: {e}")
        raise TransientStoreFailure(f"redis call on '{key}' failed: {e}") from e
    except redis.ResponseError as e:
        msg = str(e)
        if msg.startswith("WRONGTYPE") or "not an integer" in msg:
            raise BackingResourceTypeMismatch(key, expected, "value of another type") from e
        raise
