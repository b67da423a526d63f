from __future__ import annotations
from enum import Enum
from typing import Iterator, List, Optional, Protocol, Tuple, Union, overload, Literal

Score = Union[int, float]


class ResourceKind(str, Enum):
    """
    Structural type of a keyed resource.
    Values are the names Redis reports from TYPE, so backends can compare directly.
    """
    COUNTER = "string"
    FIELD_MAP = "hash"
    ORDERED_SET = "zset"


class AtomicCounter(Protocol):
    """Integer that only ever grows; every increment returns a value no caller has seen."""
    def increment(self) -> int:
        ...


class FieldMap(Protocol):
    """
    Field -> bytes mapping under one key.
    multi_get returns values aligned with the requested fields, None for absent ones.
    """
    def get(self, field: str) -> Optional[bytes]:
        ...

    def multi_get(self, fields: List[str]) -> List[Optional[bytes]]:
        ...

    def set(self, field: str, value: bytes) -> None:
        ...

    def delete_field(self, field: str) -> None:
        ...

    def items(self) -> Iterator[Tuple[str, bytes]]:
        ...


class OrderedSet(Protocol):
    """
    Members ranked by score.
    Ranges are inclusive on both bounds; the window is applied after score filtering.
    Equal scores are ordered by member string.
    """
    def add(self, score: Score, member: str) -> None:
        ...

    def remove(self, member: str) -> None:
        ...

    def range_by_score(
        self,
        min_score: Score,
        max_score: Score,
        offset: int,
        count: int,
        with_scores: bool = False,
        descending: bool = False,
    ) -> List:
        ...

    def count(self, min_score: Score, max_score: Score) -> int:
        ...

    def members(self) -> List[Tuple[str, float]]:
        ...


class Store(Protocol):
    """
    Provider of keyed resources.
    get_or_create must raise BackingResourceTypeMismatch if the key holds another kind.
    """
    @overload
    def get_or_create(self, key: str, kind: Literal[ResourceKind.COUNTER]) -> AtomicCounter: ...
    @overload
    def get_or_create(self, key: str, kind: Literal[ResourceKind.FIELD_MAP]) -> FieldMap: ...
    @overload
    def get_or_create(self, key: str, kind: Literal[ResourceKind.ORDERED_SET]) -> OrderedSet: ...

    def get_or_create(self, key: str, kind: ResourceKind):
        ...

    def delete(self, key: str) -> bool:
        ...
