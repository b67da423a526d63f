"""
Indexed table over Redis primitives.

Layout per table <name>:
  <name>:ID               counter, source of row ids
  <name>:DATA             hash, row id -> JSON row
  <name>:INDEX:<field>    sorted set per declared field, row id scored by the field value

No step of insert/update/delete is atomic with the others. A failure between
the data write and the index writes leaves rows and indexes out of step;
select tolerates that (see Result.missing) and maintenance.reindex repairs it.
"""

from __future__ import annotations
import json
import logging
import math
import sys
from typing import Any, Dict, Iterable, List, Mapping, Optional

from redis_table.core.config import settings
from redis_table.core.errors import InvalidIndexValue, RowDecodeError, UndefinedOrderField
from redis_table.models.row import ID_FIELD, Result, Row
from redis_table.models.table import TableDefinition
from redis_table.stores.base import AtomicCounter, FieldMap, OrderedSet, ResourceKind, Score, Store

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE: Score = 0
DEFAULT_MAX_SCORE: Score = sys.maxsize


def default_store() -> Store:
    """Process-wide store picked from settings, used when a table is built without one."""
    if settings.USE_REDIS:
        from redis_table.stores.redis import RedisStore
        return RedisStore.instance(settings.REDIS_URL, socket_timeout=settings.REDIS_SOCKET_TIMEOUT)
    from redis_table.stores.memory import MemoryStore
    return MemoryStore.instance()


def to_score(field: str, value: Any) -> Score:
    """Numeric score for an index value. Numeric strings are parsed; bools and NaN are refused."""
    if isinstance(value, bool):
        raise InvalidIndexValue(field, value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            raise InvalidIndexValue(field, value)
        return value
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            raise InvalidIndexValue(field, value) from None
        if math.isnan(parsed):
            raise InvalidIndexValue(field, value)
        return parsed
    raise InvalidIndexValue(field, value)


def encode_row(row: Mapping[str, Any]) -> bytes:
    return json.dumps(row).encode("utf-8")


def decode_row(raw: bytes | str) -> Dict[str, Any]:
    """Raises ValueError if raw is not a JSON object."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


class Table:
    """
    Rows stored as JSON in a hash, one sorted-set index per declared field.
    Stateless: any number of Table objects with the same name and fields
    can be created and used side by side.
    """

    def __init__(self, name: str, order_by: str | Iterable[str] | None = None, store: Store | None = None) -> None:
        self.definition = TableDefinition(name=name, order_by=order_by)
        self.store = store if store is not None else default_store()

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def order_by(self) -> tuple[str, ...]:
        return self.definition.order_by

    def __repr__(self) -> str:
        return f"Table(name={self.name!r}, order_by={list(self.order_by)!r})"

    # --------------- resources ---------------
    def _index(self, field: str) -> OrderedSet:
        return self.store.get_or_create(self.definition.index_key(field), ResourceKind.ORDERED_SET)

    def _data(self) -> FieldMap:
        return self.store.get_or_create(self.definition.data_key(), ResourceKind.FIELD_MAP)

    def _id(self) -> AtomicCounter:
        return self.store.get_or_create(self.definition.id_key(), ResourceKind.COUNTER)

    # --------------- helpers ---------------
    def _check_field(self, field: str) -> None:
        if field not in self.order_by:
            raise UndefinedOrderField(self.name, field)

    def _index_scores(self, row: Mapping[str, Any]) -> Dict[str, Optional[Score]]:
        """Score per declared field; None where the row has no value for it."""
        scores: Dict[str, Optional[Score]] = {}
        for field in self.order_by:
            value = row.get(field)
            scores[field] = None if value is None else to_score(field, value)
        return scores

    def _write_indexes(self, row_id: int, scores: Dict[str, Optional[Score]], prune: bool = True) -> None:
        """Add the row to each index it has a value for; with prune, drop it from the others."""
        member = str(row_id)
        for field, score in scores.items():
            if score is not None:
                self._index(field).add(score, member)
            elif prune:
                self._index(field).remove(member)

    # --------------- queries ---------------
    def select(
        self,
        field: str,
        offset: int,
        length: int,
        descending: bool = False,
        min_score: Score | None = None,
        max_score: Score | None = None,
    ) -> Result:
        """
        Page through rows ordered by an index field.
        Scores are filtered to [min_score, max_score] (inclusive, default 0..sys.maxsize)
        before the [offset, offset + length) window is taken.
        """
        self._check_field(field)
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        lo = DEFAULT_MIN_SCORE if min_score is None else to_score(field, min_score)
        hi = DEFAULT_MAX_SCORE if max_score is None else to_score(field, max_score)
        result = Result(table=self.name)
        if length <= 0:
            return result

        ids: List[str] = self._index(field).range_by_score(lo, hi, offset, length, descending=descending)
        logger.debug(f"{self.name}: select {field} [{lo}, {hi}] offset={offset} length={length} -> {len(ids)} ids")
        if not ids:
            return result

        for member, raw in zip(ids, self._data().multi_get(ids)):
            if raw is None:
                logger.warning(f"{self.name}: index {field} points at missing row {member}")
                result.missing.append(int(member))
                continue
            try:
                data = decode_row(raw)
            except ValueError:
                logger.warning(f"{self.name}: row {member} is not valid JSON, skipped")
                result.missing.append(int(member))
                continue
            result.rows.append(Row(self.name, data))
        return result

    def exists(self, field: str, value: Any) -> bool:
        """True if at least one row is indexed under field with exactly this value."""
        self._check_field(field)
        score = to_score(field, value)
        return self._index(field).count(score, score) > 0

    def row(self, row_id: int) -> Row:
        raw = self._data().get(str(int(row_id)))
        if raw is None:
            return Row(self.name)
        try:
            return Row(self.name, decode_row(raw))
        except ValueError as e:
            raise RowDecodeError(self.name, row_id) from e

    # --------------- writes ---------------
    def insert(self, row: Mapping[str, Any]) -> int:
        """Store a new row and index it. Returns the id written into its redisId field."""
        row = dict(row)
        scores = self._index_scores(row)

        new_id = self._id().increment()
        row[ID_FIELD] = new_id
        self._data().set(str(new_id), encode_row(row))
        self._write_indexes(new_id, scores, prune=False)
        logger.debug(f"{self.name}: inserted row {new_id}")
        return new_id

    def update(self, row_id: int, partial: Mapping[str, Any]) -> int:
        """
        Merge partial over the stored row and re-index every declared field.
        An absent row is treated as empty, so the result holds only partial's fields.
        """
        row_id = int(row_id)
        merged = self.row(row_id).to_dict()
        merged.update(partial)
        merged[ID_FIELD] = row_id
        scores = self._index_scores(merged)

        self._data().set(str(row_id), encode_row(merged))
        self._write_indexes(row_id, scores)
        logger.debug(f"{self.name}: updated row {row_id}")
        return row_id

    def delete(self, row_id: int) -> None:
        member = str(int(row_id))
        self._data().delete_field(member)
        for field in self.order_by:
            self._index(field).remove(member)
        logger.debug(f"{self.name}: deleted row {member}")


def redis_table(name: str, order_by: str | Iterable[str] | None = None, store: Store | None = None) -> Table:
    """Shortcut for Table(name, order_by, store)."""
    return Table(name, order_by, store)
