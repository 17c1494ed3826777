"""Record and fetch-batch models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """A single data record read from a shard."""

    sequence_number: str = Field(..., min_length=1)
    partition_key: str
    data: bytes
    approximate_arrival_timestamp: datetime | None = None
    encryption_type: str | None = None

    model_config = ConfigDict(frozen=True)

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the record payload as text."""
        return self.data.decode(encoding)


class RecordBatch(BaseModel):
    """Records returned by one fetch plus the iterator for the next fetch.

    ``next_iterator`` is None once a closed shard has been fully read.
    """

    records: tuple[Record, ...] = ()
    next_iterator: str | None = None
    millis_behind_latest: int | None = Field(None, ge=0)

    model_config = ConfigDict(frozen=True)
