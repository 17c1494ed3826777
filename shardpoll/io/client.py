"""Kinesis implementation of StreamService."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from botocore.credentials import Credentials
from pydantic import ValidationError

from ..core.enums import IteratorType
from ..core.exceptions import ServiceError
from ..models import RecordBatch, Shard, StreamDescription
from .endpoints import (
    DESCRIBE_STREAM,
    GET_RECORDS,
    GET_SHARD_ITERATOR,
    KinesisEndpointSpec,
)
from .service import StreamService
from .transport import KinesisTransport

logger = logging.getLogger(__name__)


class KinesisClient(StreamService):
    """StreamService speaking the Kinesis JSON API.

    Args:
        endpoint_url: Service endpoint. Defaults to the regional AWS endpoint;
            point it at a local emulator for development.
        region: Signing region. Defaults to the botocore-configured region.
        timeout: Per-request timeout in seconds.
        credentials: Explicit credentials. Resolved from the botocore chain
            when omitted.
        sign: Set False to send unsigned requests.
        transport: Pre-built transport; overrides the other arguments.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        region: str | None = None,
        *,
        timeout: float = 30.0,
        credentials: Credentials | None = None,
        sign: bool = True,
        transport: KinesisTransport | None = None,
    ) -> None:
        self._t = transport or KinesisTransport(
            endpoint_url,
            region,
            timeout=timeout,
            credentials=credentials,
            sign=sign,
        )

    @property
    def transport(self) -> KinesisTransport:
        return self._t

    async def _run(self, spec: KinesisEndpointSpec, params: dict[str, Any]) -> Any:
        body = spec.build_body(params)
        data = await self._t.post(spec.target, body)
        try:
            return spec.adapter.parse(data, params)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise ServiceError(f"{spec.target} returned a malformed response: {e}") from e

    async def describe_stream(self, stream_name: str) -> StreamDescription:
        """Describe a stream, following HasMoreShards until every shard is listed."""
        shards: list[Shard] = []
        status: str | None = None
        params: dict[str, Any] = {"stream_name": stream_name}
        while True:
            page = await self._run(DESCRIBE_STREAM, params)
            shards.extend(page.description.shards)
            status = page.description.stream_status
            if not page.has_more_shards or not page.description.shards:
                break
            params = {
                "stream_name": stream_name,
                "exclusive_start_shard_id": page.description.shards[-1].shard_id,
            }
            logger.debug(
                "Fetching next shard page",
                extra={"stream": stream_name, "shards_so_far": len(shards)},
            )
        return StreamDescription(stream_name=stream_name, stream_status=status, shards=tuple(shards))

    async def get_shard_iterator(
        self,
        stream_name: str,
        shard_id: str,
        iterator_type: IteratorType,
        *,
        starting_sequence_number: str | None = None,
        timestamp: datetime | None = None,
    ) -> str:
        return await self._run(
            GET_SHARD_ITERATOR,
            {
                "stream_name": stream_name,
                "shard_id": shard_id,
                "iterator_type": IteratorType(iterator_type),
                "starting_sequence_number": starting_sequence_number,
                "timestamp": timestamp,
            },
        )

    async def get_records(self, shard_iterator: str, limit: int) -> RecordBatch:
        return await self._run(GET_RECORDS, {"shard_iterator": shard_iterator, "limit": limit})

    async def close(self) -> None:
        await self._t.close()
