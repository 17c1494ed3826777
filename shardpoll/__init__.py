"""shardpoll - Polling consumer for sharded Kinesis streams."""

import logging

from .core import (
    MAX_RECORDS_PER_FETCH,
    DescribeFailed,
    FetchFailed,
    IteratorRequestFailed,
    IteratorType,
    NoShards,
    ServiceError,
    ShardPollError,
    StoreUnavailable,
    StreamConfig,
    ThrottledError,
)
from .io import KinesisClient, KinesisTransport, StreamService
from .models import Record, RecordBatch, Shard, StreamDescription
from .runtime import Handler, Stream
from .store import InMemoryPositionStore, PositionStore

__version__ = "0.1.0"

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core
    "IteratorType",
    "StreamConfig",
    "MAX_RECORDS_PER_FETCH",
    # Runtime
    "Stream",
    "Handler",
    # Stores
    "PositionStore",
    "InMemoryPositionStore",
    # Service
    "StreamService",
    "KinesisClient",
    "KinesisTransport",
    # Models
    "Record",
    "RecordBatch",
    "Shard",
    "StreamDescription",
    # Exceptions
    "ShardPollError",
    "ServiceError",
    "ThrottledError",
    "DescribeFailed",
    "NoShards",
    "IteratorRequestFailed",
    "StoreUnavailable",
    "FetchFailed",
]
