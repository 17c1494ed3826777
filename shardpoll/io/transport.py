"""HTTP transport for the Kinesis JSON protocol."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from botocore.session import get_session

from ..core.exceptions import ServiceError, ThrottledError

logger = logging.getLogger(__name__)

TARGET_PREFIX = "Kinesis_20131202"
CONTENT_TYPE = "application/x-amz-json-1.1"
SERVICE_NAME = "kinesis"
DEFAULT_REGION = "us-east-1"

THROTTLING_ERRORS = frozenset(
    {
        "ProvisionedThroughputExceededException",
        "LimitExceededException",
        "ThrottlingException",
    }
)


def default_endpoint(region: str) -> str:
    return f"https://kinesis.{region}.amazonaws.com"


def error_from_response(status: int, text: str, target: str) -> ServiceError:
    """Build a ServiceError from an error response body.

    Kinesis reports errors as ``{"__type": "...#ErrorName", "message": "..."}``.
    """
    error_type = None
    message = text
    try:
        payload = json.loads(text) if text else {}
    except ValueError:
        payload = {}
    if isinstance(payload, dict):
        raw_type = payload.get("__type")
        if raw_type:
            error_type = str(raw_type).rsplit("#", 1)[-1]
        message = payload.get("message") or payload.get("Message") or message

    detail = f"{target} failed ({status}"
    detail += f" {error_type})" if error_type else ")"
    if message:
        detail += f": {message}"

    if error_type in THROTTLING_ERRORS:
        return ThrottledError(detail, status_code=status, error_type=error_type)
    return ServiceError(detail, status_code=status, error_type=error_type)


class KinesisTransport:
    """Async transport posting signed JSON requests to a Kinesis endpoint.

    Requests are signed with SigV4 when credentials are available, either
    passed in or resolved lazily from the botocore credential chain. Pass
    ``sign=False`` for local emulators that do not check signatures.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        region: str | None = None,
        *,
        timeout: float = 30.0,
        credentials: Credentials | None = None,
        sign: bool = True,
    ) -> None:
        self.region = region or get_session().get_config_variable("region") or DEFAULT_REGION
        self.endpoint_url = (endpoint_url or default_endpoint(self.region)).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.sign = sign
        self._credentials = credentials
        self._credentials_resolved = credentials is not None
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    @property
    def url(self) -> str:
        return f"{self.endpoint_url}/"

    async def _resolve_credentials(self) -> Credentials | None:
        if not self._credentials_resolved:
            # The credential chain may hit the network (instance metadata).
            self._credentials = await asyncio.to_thread(get_session().get_credentials)
            self._credentials_resolved = True
            if self._credentials is None:
                logger.warning("No AWS credentials found, sending unsigned requests")
        return self._credentials

    async def _signed_headers(self, body: bytes, headers: dict[str, str]) -> dict[str, str]:
        if not self.sign:
            return headers
        credentials = await self._resolve_credentials()
        if credentials is None:
            return headers
        request = AWSRequest(method="POST", url=self.url, data=body, headers=headers)
        SigV4Auth(credentials.get_frozen_credentials(), SERVICE_NAME, self.region).add_auth(request)
        return dict(request.headers.items())

    async def post(self, target: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Invoke one API operation and return the decoded JSON response.

        Args:
            target: Operation name, e.g. ``GetRecords``
            payload: Request body

        Raises:
            ThrottledError: If the service reports a rate limit
            ServiceError: For any other error response or transport failure
        """
        body = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": CONTENT_TYPE,
            "X-Amz-Target": f"{TARGET_PREFIX}.{target}",
        }
        headers = await self._signed_headers(body, headers)

        try:
            async with self.session.post(self.url, data=body, headers=headers) as response:
                text = await response.text()
                if response.status >= 400:
                    raise error_from_response(response.status, text, target)
        except aiohttp.ClientError as e:
            raise ServiceError(f"{target} request failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise ServiceError(f"{target} request timed out") from e

        if not text:
            return {}
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ServiceError(f"{target} returned invalid JSON", status_code=response.status) from e
        if not isinstance(data, dict):
            raise ServiceError(f"{target} returned unexpected payload", status_code=response.status)
        return data

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> KinesisTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
