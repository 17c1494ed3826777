"""I/O layer: remote stream service interface and the Kinesis HTTP client."""

from .adapters import ResponseAdapter
from .client import KinesisClient
from .endpoints import KinesisEndpointSpec
from .service import StreamService
from .transport import KinesisTransport

__all__ = [
    "StreamService",
    "KinesisClient",
    "KinesisTransport",
    "KinesisEndpointSpec",
    "ResponseAdapter",
]
