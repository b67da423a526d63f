from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

ID_FIELD = "redisId"


@dataclass(frozen=True)
class Row:
    """
    One decoded table row.
    An empty Row means the id had nothing stored under it.
    """
    table: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> Optional[int]:
        return self.data.get(ID_FIELD)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.data)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __bool__(self) -> bool:
        return bool(self.data)


@dataclass
class Result:
    """
    Rows returned by a select, in index order.
    'missing' lists ids the index returned but whose rows were absent or unreadable.
    """
    table: str
    rows: List[Row] = field(default_factory=list)
    missing: List[int] = field(default_factory=list)

    def ids(self) -> List[int]:
        return [r.id for r in self.rows]

    def to_list(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.rows]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)
