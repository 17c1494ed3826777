"""Run configuration for a listen session."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import IteratorType

# GetRecords accepts at most 10,000 records per call.
MAX_RECORDS_PER_FETCH = 10_000


class StreamConfig(BaseModel):
    """How a Stream interacts with the underlying service.

    Attributes:
        interval: Seconds between the start of consecutive ticks. Each shard
            allows five reads per second across all consumers, so size this with
            the number of concurrent pollers in mind.
        iterator_type: Starting position policy used when seeding shards.
        limit: Maximum records requested per fetch. Consider record size so a
            single response stays under the service's per-call byte ceiling.
        starting_sequence_number: Required for AT_SEQUENCE_NUMBER and
            AFTER_SEQUENCE_NUMBER.
        timestamp: Required for AT_TIMESTAMP. A naive datetime is taken as UTC.
    """

    interval: float = Field(1.0, gt=0)
    iterator_type: IteratorType = IteratorType.LATEST
    limit: int = Field(1000, ge=1, le=MAX_RECORDS_PER_FETCH)
    starting_sequence_number: str | None = Field(None, min_length=1)
    timestamp: datetime | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Pin naive timestamps to UTC so the host time zone never shifts them."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def validate_iterator_parameters(self) -> StreamConfig:
        """Check the policy parameter matches the iterator type."""
        if self.iterator_type.requires_sequence_number:
            if self.starting_sequence_number is None:
                raise ValueError(
                    f"{self.iterator_type.value} requires starting_sequence_number"
                )
        elif self.starting_sequence_number is not None:
            raise ValueError(
                f"starting_sequence_number is not used by {self.iterator_type.value}"
            )

        if self.iterator_type.requires_timestamp:
            if self.timestamp is None:
                raise ValueError("AT_TIMESTAMP requires timestamp")
        elif self.timestamp is not None:
            raise ValueError(f"timestamp is not used by {self.iterator_type.value}")
        return self
