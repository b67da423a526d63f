"""
In-memory store package.
"""

from .counter import MemoryCounter
from .field_map import MemoryFieldMap
from .ordered_set import MemoryOrderedSet
from .store import MemoryStore

__all__ = ["MemoryCounter", "MemoryFieldMap", "MemoryOrderedSet", "MemoryStore"]
