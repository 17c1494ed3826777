"""Core components."""

from .config import MAX_RECORDS_PER_FETCH, StreamConfig
from .enums import IteratorType
from .exceptions import (
    DescribeFailed,
    FetchFailed,
    IteratorRequestFailed,
    NoShards,
    ServiceError,
    ShardPollError,
    StoreUnavailable,
    ThrottledError,
)

__all__ = [
    "IteratorType",
    "StreamConfig",
    "MAX_RECORDS_PER_FETCH",
    "ShardPollError",
    "ServiceError",
    "ThrottledError",
    "DescribeFailed",
    "NoShards",
    "IteratorRequestFailed",
    "StoreUnavailable",
    "FetchFailed",
]
