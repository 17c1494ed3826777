"""Precise unit tests for KinesisTransport.

Tests focus on request shape, signing, and error mapping.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from botocore.credentials import Credentials

from shardpoll.core import ServiceError, ThrottledError
from shardpoll.io.transport import KinesisTransport, error_from_response


def make_response(status: int = 200, body: str = "{}") -> AsyncMock:
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=body)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)
    return mock_response


def attach_session(transport: KinesisTransport, **post_kwargs) -> MagicMock:
    mock_session = MagicMock()
    mock_session.closed = False  # session property checks this
    mock_session.post = MagicMock(**post_kwargs)
    transport._session = mock_session
    return mock_session


class TestKinesisTransportInit:
    def test_default_endpoint_from_region(self):
        transport = KinesisTransport(region="eu-west-1")
        assert transport.endpoint_url == "https://kinesis.eu-west-1.amazonaws.com"
        assert transport.url == "https://kinesis.eu-west-1.amazonaws.com/"

    def test_custom_endpoint_trailing_slash(self):
        transport = KinesisTransport("http://localhost:4566/", region="us-east-1")
        assert transport.url == "http://localhost:4566/"

    def test_timeout(self):
        transport = KinesisTransport(region="us-east-1", timeout=5.0)
        assert transport.timeout.total == 5.0

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        transport = KinesisTransport(region="us-east-1")
        session = transport.session
        assert isinstance(session, aiohttp.ClientSession)
        await transport.close()
        assert session.closed

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        transport = KinesisTransport(region="us-east-1")
        await transport.close()
        await transport.close()


class TestKinesisTransportPost:
    @pytest.mark.asyncio
    async def test_post_sends_target_and_json(self):
        transport = KinesisTransport("http://localhost:4566", region="us-east-1", sign=False)
        session = attach_session(transport, return_value=make_response(body='{"ShardIterator": "it"}'))

        result = await transport.post("GetShardIterator", {"StreamName": "orders"})

        assert result == {"ShardIterator": "it"}
        args, kwargs = session.post.call_args
        assert args[0] == "http://localhost:4566/"
        assert json.loads(kwargs["data"]) == {"StreamName": "orders"}
        assert kwargs["headers"]["X-Amz-Target"] == "Kinesis_20131202.GetShardIterator"
        assert kwargs["headers"]["Content-Type"] == "application/x-amz-json-1.1"
        assert "Authorization" not in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_post_signs_with_credentials(self):
        transport = KinesisTransport(
            "http://localhost:4566",
            region="us-east-1",
            credentials=Credentials("AKIDEXAMPLE", "secret", "session-token"),
        )
        session = attach_session(transport, return_value=make_response())

        await transport.post("DescribeStream", {"StreamName": "orders"})

        headers = session.post.call_args.kwargs["headers"]
        assert headers["Authorization"].startswith("AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/")
        assert "/us-east-1/kinesis/aws4_request" in headers["Authorization"]
        assert "X-Amz-Date" in headers
        assert headers["X-Amz-Security-Token"] == "session-token"
        assert headers["X-Amz-Target"] == "Kinesis_20131202.DescribeStream"

    @pytest.mark.asyncio
    async def test_post_empty_body_returns_empty_dict(self):
        transport = KinesisTransport("http://localhost:4566", region="us-east-1", sign=False)
        attach_session(transport, return_value=make_response(body=""))
        assert await transport.post("GetRecords", {}) == {}

    @pytest.mark.asyncio
    async def test_post_error_response(self):
        transport = KinesisTransport("http://localhost:4566", region="us-east-1", sign=False)
        body = json.dumps(
            {
                "__type": "com.amazonaws.kinesis#ResourceNotFoundException",
                "message": "Stream orders not found",
            }
        )
        attach_session(transport, return_value=make_response(status=400, body=body))

        with pytest.raises(ServiceError) as exc_info:
            await transport.post("DescribeStream", {"StreamName": "orders"})

        error = exc_info.value
        assert not isinstance(error, ThrottledError)
        assert error.status_code == 400
        assert error.error_type == "ResourceNotFoundException"
        assert "Stream orders not found" in str(error)

    @pytest.mark.asyncio
    async def test_post_throttled(self):
        transport = KinesisTransport("http://localhost:4566", region="us-east-1", sign=False)
        body = json.dumps(
            {"__type": "ProvisionedThroughputExceededException", "message": "Rate exceeded"}
        )
        attach_session(transport, return_value=make_response(status=400, body=body))

        with pytest.raises(ThrottledError):
            await transport.post("GetRecords", {"ShardIterator": "it"})

    @pytest.mark.asyncio
    async def test_post_connection_error(self):
        transport = KinesisTransport("http://localhost:4566", region="us-east-1", sign=False)
        attach_session(transport, side_effect=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(ServiceError, match="GetRecords request failed") as exc_info:
            await transport.post("GetRecords", {})
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_post_timeout(self):
        transport = KinesisTransport("http://localhost:4566", region="us-east-1", sign=False)
        attach_session(transport, side_effect=asyncio.TimeoutError())

        with pytest.raises(ServiceError, match="timed out"):
            await transport.post("GetRecords", {})

    @pytest.mark.asyncio
    async def test_post_invalid_json(self):
        transport = KinesisTransport("http://localhost:4566", region="us-east-1", sign=False)
        attach_session(transport, return_value=make_response(body="<html>"))

        with pytest.raises(ServiceError, match="invalid JSON"):
            await transport.post("GetRecords", {})


def test_error_from_response_non_json_body():
    """Test plain-text error bodies still produce a ServiceError."""
    error = error_from_response(500, "Internal Server Error", "GetRecords")
    assert error.status_code == 500
    assert error.error_type is None
    assert "Internal Server Error" in str(error)
