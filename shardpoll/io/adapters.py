"""Response adapters for Kinesis operations."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ..models import Record, RecordBatch, Shard, StreamDescription


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


@dataclass(frozen=True)
class DescribeStreamPage:
    description: StreamDescription
    has_more_shards: bool


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(float(value), tz=timezone.utc)


class DescribeStreamAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> DescribeStreamPage:
        sd = response.get("StreamDescription") or {}
        shards = []
        for raw in sd.get("Shards", []) or []:
            seq_range = raw.get("SequenceNumberRange") or {}
            shards.append(
                Shard(
                    shard_id=raw["ShardId"],
                    starting_sequence_number=seq_range.get("StartingSequenceNumber", ""),
                    ending_sequence_number=seq_range.get("EndingSequenceNumber"),
                    parent_shard_id=raw.get("ParentShardId"),
                )
            )
        description = StreamDescription(
            stream_name=sd.get("StreamName") or params["stream_name"],
            stream_status=sd.get("StreamStatus"),
            shards=tuple(shards),
        )
        return DescribeStreamPage(
            description=description,
            has_more_shards=bool(sd.get("HasMoreShards", False)),
        )


class GetShardIteratorAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> str:
        iterator = response.get("ShardIterator")
        if not iterator:
            raise ValueError(f"no ShardIterator returned for shard {params['shard_id']}")
        return iterator


class GetRecordsAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> RecordBatch:
        records = tuple(
            Record(
                sequence_number=raw["SequenceNumber"],
                partition_key=raw.get("PartitionKey", ""),
                data=base64.b64decode(raw.get("Data") or b""),
                approximate_arrival_timestamp=_parse_timestamp(
                    raw.get("ApproximateArrivalTimestamp")
                ),
                encryption_type=raw.get("EncryptionType"),
            )
            for raw in response.get("Records", []) or []
        )
        return RecordBatch(
            records=records,
            next_iterator=response.get("NextShardIterator") or None,
            millis_behind_latest=response.get("MillisBehindLatest"),
        )
