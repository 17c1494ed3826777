"""Custom exception hierarchy.

Every failure the library surfaces derives from ShardPollError. Failures are
never retried or suppressed by the poll loop; they propagate to the caller of
``Stream.connect()`` or ``Stream.listen()`` with the underlying cause chained.
"""

from __future__ import annotations


class ShardPollError(Exception):
    """Base exception for all library errors."""

    pass


class ServiceError(ShardPollError):
    """Error returned by the remote stream service or its transport."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_type = error_type


class ThrottledError(ServiceError):
    """Service read or control-plane rate limit exceeded."""

    pass


class DescribeFailed(ShardPollError):
    """Stream description could not be retrieved."""

    def __init__(self, message: str, stream: str | None = None) -> None:
        super().__init__(message)
        self.stream = stream


class NoShards(ShardPollError):
    """Stream reported zero shards and cannot be polled."""

    def __init__(self, message: str, stream: str | None = None) -> None:
        super().__init__(message)
        self.stream = stream


class _ShardError(ShardPollError):
    def __init__(
        self,
        message: str,
        stream: str | None = None,
        shard_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.stream = stream
        self.shard_id = shard_id


class IteratorRequestFailed(_ShardError):
    """Initial shard iterator could not be obtained while seeding."""

    pass


class StoreUnavailable(_ShardError):
    """Position store failed to read or write a shard position."""

    pass


class FetchFailed(_ShardError):
    """Record fetch for a shard failed.

    ``shard_closed`` is True when the service returned a batch without a next
    iterator, which means the shard has been closed and fully consumed.
    """

    def __init__(
        self,
        message: str,
        stream: str | None = None,
        shard_id: str | None = None,
        shard_closed: bool = False,
    ) -> None:
        super().__init__(message, stream=stream, shard_id=shard_id)
        self.shard_closed = shard_closed
