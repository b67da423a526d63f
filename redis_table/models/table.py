from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import Any, Tuple


class TableDefinition(BaseModel):
    """
    Name and declared index fields of a table.
    'name' prefixes every Redis key of the table (<name>:ID, <name>:DATA, <name>:INDEX:<field>),
    so two definitions with the same name address the same data.
    """
    name: str = Field(min_length=1)
    order_by: Tuple[str, ...] = Field(
        default=(),
        description="Index fields; a single name is accepted and wrapped"
    )

    model_config = {"frozen": True}

    @field_validator('order_by', mode='before')
    @classmethod
    def normalize_order_by(cls, v: Any) -> Tuple[str, ...]:
        """Accept None, one field name or an iterable of names; drop duplicates, keep order."""
        if not v:
            return ()
        if isinstance(v, str):
            return (v,)
        return tuple(dict.fromkeys(v))

    def id_key(self) -> str:
        return f"{self.name}:ID"

    def data_key(self) -> str:
        return f"{self.name}:DATA"

    def index_key(self, field: str) -> str:
        return f"{self.name}:INDEX:{field}"
