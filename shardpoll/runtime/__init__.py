"""Runtime components: the stream handle and its poll loop."""

from .stream import Handler, Stream

__all__ = [
    "Stream",
    "Handler",
]
