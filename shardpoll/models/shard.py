"""Shard and stream description models."""

from pydantic import BaseModel, ConfigDict, Field


class Shard(BaseModel):
    """A shard of a stream.

    ``starting_sequence_number`` is the lowest sequence number ever assigned on
    the shard. It is descriptive only; reads start from the seeded iterator.
    """

    shard_id: str = Field(..., min_length=1)
    starting_sequence_number: str
    ending_sequence_number: str | None = None
    parent_shard_id: str | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def is_closed(self) -> bool:
        """A shard with an ending sequence number no longer accepts writes."""
        return self.ending_sequence_number is not None


class StreamDescription(BaseModel):
    """Result of describing a stream: its name, status and shard directory."""

    stream_name: str = Field(..., min_length=1)
    stream_status: str | None = None
    shards: tuple[Shard, ...] = ()

    model_config = ConfigDict(frozen=True)
