"""Position store interface.

Architecture:
    A PositionStore durably maps (stream, shard) to the iterator to use for the
    next fetch on that shard. The poll loop reads it once and writes it once per
    shard per tick, so a restarted consumer resumes from the last written
    position.

    Implementations may be backed by anything (local dict, Redis, DynamoDB, a
    file). They must be safe for concurrent use: several processes polling
    disjoint shards can share one store. Making sure no two processes poll the
    same shard is the deployer's job, not the store's.

See Also:
    - InMemoryPositionStore: Reference implementation
    - Stream: Reads and advances positions
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class PositionStore(ABC):
    """Durable (stream, shard) -> iterator mapping."""

    @abstractmethod
    async def get(self, stream: str, shard: str) -> str | None:
        """Return the stored iterator, or None if the shard was never seeded.

        Raises:
            StoreUnavailable: On storage faults only. A miss is not a fault.
        """
        raise NotImplementedError

    @abstractmethod
    async def set(self, stream: str, shard: str, position: str) -> None:
        """Record ``position`` as the next iterator, replacing any prior value.

        Raises:
            StoreUnavailable: On storage faults.
        """
        raise NotImplementedError
