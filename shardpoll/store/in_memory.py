"""In-process position store."""

from __future__ import annotations

import threading

from .base import PositionStore


class InMemoryPositionStore(PositionStore):
    """PositionStore backed by a dict keyed by (stream, shard).

    Positions live only as long as the process, and the store cannot be shared
    between containers. A single lock guards reads and writes so the store can
    be used from coroutines and worker threads alike.
    """

    def __init__(self) -> None:
        self._positions: dict[tuple[str, str], str] = {}
        self._lock = threading.Lock()

    async def get(self, stream: str, shard: str) -> str | None:
        with self._lock:
            return self._positions.get((stream, shard))

    async def set(self, stream: str, shard: str, position: str) -> None:
        with self._lock:
            self._positions[(stream, shard)] = position

    def snapshot(self) -> dict[tuple[str, str], str]:
        """Copy of all stored positions."""
        with self._lock:
            return dict(self._positions)

    def clear(self) -> None:
        """Forget every stored position."""
        with self._lock:
            self._positions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._positions)
