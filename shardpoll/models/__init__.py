"""Data models for stream consumption.

All models are immutable pydantic v2 models (frozen=True).

Model Categories:
    - Topology: Shard, StreamDescription
    - Data: Record, RecordBatch
"""

from .record import Record, RecordBatch
from .shard import Shard, StreamDescription

__all__ = [
    "Record",
    "RecordBatch",
    "Shard",
    "StreamDescription",
]
