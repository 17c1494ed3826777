"""Endpoint specs for the Kinesis operations the consumer uses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .adapters import (
    DescribeStreamAdapter,
    GetRecordsAdapter,
    GetShardIteratorAdapter,
    ResponseAdapter,
)


@dataclass(frozen=True)
class KinesisEndpointSpec:
    id: str
    target: str  # X-Amz-Target operation name
    build_body: Callable[[dict[str, Any]], dict[str, Any]]
    adapter: ResponseAdapter


def _describe_stream_body(params: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {"StreamName": params["stream_name"]}
    if params.get("exclusive_start_shard_id"):
        body["ExclusiveStartShardId"] = params["exclusive_start_shard_id"]
    if params.get("limit"):
        body["Limit"] = params["limit"]
    return body


def _epoch_seconds(ts: datetime) -> float:
    # Naive datetimes are UTC, never host local time
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


def _get_shard_iterator_body(params: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {
        "StreamName": params["stream_name"],
        "ShardId": params["shard_id"],
        "ShardIteratorType": params["iterator_type"].value,
    }
    if params.get("starting_sequence_number") is not None:
        body["StartingSequenceNumber"] = params["starting_sequence_number"]
    if params.get("timestamp") is not None:
        body["Timestamp"] = _epoch_seconds(params["timestamp"])
    return body


def _get_records_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"ShardIterator": params["shard_iterator"], "Limit": params["limit"]}


DESCRIBE_STREAM = KinesisEndpointSpec(
    id="describe_stream",
    target="DescribeStream",
    build_body=_describe_stream_body,
    adapter=DescribeStreamAdapter(),
)

GET_SHARD_ITERATOR = KinesisEndpointSpec(
    id="get_shard_iterator",
    target="GetShardIterator",
    build_body=_get_shard_iterator_body,
    adapter=GetShardIteratorAdapter(),
)

GET_RECORDS = KinesisEndpointSpec(
    id="get_records",
    target="GetRecords",
    build_body=_get_records_body,
    adapter=GetRecordsAdapter(),
)
