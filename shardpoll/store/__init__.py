"""Position stores for per-shard iterators."""

from .base import PositionStore
from .in_memory import InMemoryPositionStore

__all__ = [
    "PositionStore",
    "InMemoryPositionStore",
]
