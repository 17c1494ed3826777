"""Remote stream service interface.

Architecture:
    The Stream only depends on the three calls below. KinesisClient implements
    them over HTTP; tests and alternative backends can supply their own
    implementation without touching the poll loop.

Design Decisions:
    - Abstract base class: Enforces a consistent interface across backends
    - Async context manager: Ensures transport resources are released
    - Errors: Implementations raise ServiceError (or a subclass) for every
      service or transport fault so the Stream can classify them
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..core.enums import IteratorType
from ..models import RecordBatch, StreamDescription


class StreamService(ABC):
    """Calls consumed from the remote stream service."""

    @abstractmethod
    async def describe_stream(self, stream_name: str) -> StreamDescription:
        """Describe a stream, including every shard it currently has."""
        raise NotImplementedError

    @abstractmethod
    async def get_shard_iterator(
        self,
        stream_name: str,
        shard_id: str,
        iterator_type: IteratorType,
        *,
        starting_sequence_number: str | None = None,
        timestamp: datetime | None = None,
    ) -> str:
        """Return a starting iterator for a shard under the given policy."""
        raise NotImplementedError

    @abstractmethod
    async def get_records(self, shard_iterator: str, limit: int) -> RecordBatch:
        """Fetch up to ``limit`` records starting at ``shard_iterator``."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release transport resources."""
        return None

    async def __aenter__(self) -> StreamService:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
