"""
Error model shared by tables and stores.
Every error carries a stable integer `code` so callers can branch without
matching on class names.
"""

from __future__ import annotations


class RedisTableError(Exception):
    code: int = 0


class UndefinedOrderField(RedisTableError, ValueError):
    """Raised when select/exists is asked for a field that was not declared as an index."""
    code = 1

    def __init__(self, table: str, field: str) -> None:
        super().__init__(f"redis table '{table}' has no index on field: {field}")
        self.table = table
        self.field = field


class BackingResourceTypeMismatch(RedisTableError):
    """A key derived for a table already holds data of another structural type."""
    code = 2

    def __init__(self, key: str, expected: str, actual: str) -> None:
        super().__init__(f"key '{key}' holds a {actual}, expected a {expected}")
        self.key = key
        self.expected = expected
        self.actual = actual


class TransientStoreFailure(RedisTableError):
    """
    The backing store could not be reached or timed out.
    Never retried at this layer; the original exception is chained as __cause__.
    """
    code = 3


class InvalidIndexValue(RedisTableError, ValueError):
    code = 4

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"index field '{field}' needs a numeric value, got {value!r}")
        self.field = field
        self.value = value


class RowDecodeError(RedisTableError):
    code = 5

    def __init__(self, table: str, row_id: int | str) -> None:
        super().__init__(f"row {row_id} of table '{table}' is not a JSON object")
        self.table = table
        self.row_id = row_id
