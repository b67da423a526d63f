"""
Indexed tables on Redis: rows in a hash, ids from a counter, sorted-set indexes per field.
"""

from redis_table.core.errors import (
    BackingResourceTypeMismatch,
    InvalidIndexValue,
    RedisTableError,
    RowDecodeError,
    TransientStoreFailure,
    UndefinedOrderField,
)
from redis_table.models.row import ID_FIELD, Result, Row
from redis_table.services.table import Table, default_store, redis_table

__all__ = [
    "Table",
    "redis_table",
    "default_store",
    "Row",
    "Result",
    "ID_FIELD",
    "RedisTableError",
    "UndefinedOrderField",
    "BackingResourceTypeMismatch",
    "TransientStoreFailure",
    "InvalidIndexValue",
    "RowDecodeError",
]
