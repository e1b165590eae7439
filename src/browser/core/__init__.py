"""Core fetch components."""

from .protocols import Response, Stream
from .reader import read_response
from .transport import SocketStream, fetch, open_stream, synthesize

__all__ = [
    "Response",
    "Stream",
    "SocketStream",
    "fetch",
    "open_stream",
    "read_response",
    "synthesize",
]
