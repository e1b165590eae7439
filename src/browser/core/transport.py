"""Transports: plain and TLS sockets, local files and data URLs."""

import socket
import ssl
from pathlib import Path

import structlog

from ..config import settings
from ..errors import ConnectionFailed, IoFailure, UnsupportedScheme
from ..url import RequestDescriptor, Scheme
from .protocols import Response
from .reader import HTTP_VERSION, read_response

logger = structlog.get_logger()


class SocketStream:
    """Stream over a connected socket, plain or TLS-wrapped."""

    def __init__(self, sock: socket.socket):
        self._sock = sock
        self._file = sock.makefile("rb")

    def write(self, data: bytes) -> None:
        self._sock.sendall(data)

    def readline(self) -> bytes:
        return self._file.readline()

    def read(self) -> bytes:
        return self._file.read()

    def close(self) -> None:
        self._file.close()
        self._sock.close()

    def __enter__(self) -> "SocketStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_stream(descriptor: RequestDescriptor) -> SocketStream:
    """
    Connect to the descriptor's host, negotiating TLS for https.

    No timeout is set: a peer that never answers blocks forever.

    Raises:
        ConnectionFailed: DNS, TCP or TLS setup failed.
    """
    if descriptor.scheme not in (Scheme.HTTP, Scheme.HTTPS):
        raise UnsupportedScheme(descriptor.scheme.value)

    try:
        sock = socket.create_connection((descriptor.host, descriptor.port))
    except OSError as e:
        raise ConnectionFailed(f"Cannot connect to {descriptor.authority}: {e}") from e

    if descriptor.scheme is Scheme.HTTPS:
        ctx = ssl.create_default_context()
        try:
            sock = ctx.wrap_socket(sock, server_hostname=descriptor.host)
        except OSError as e:
            sock.close()
            raise ConnectionFailed(f"TLS handshake with {descriptor.host} failed: {e}") from e

    logger.debug("connection_opened", authority=descriptor.authority,
                 tls=descriptor.scheme is Scheme.HTTPS)
    return SocketStream(sock)


def _ok(body: bytes) -> Response:
    return Response(version=HTTP_VERSION, status=200, reason="OK", headers={}, body=body)


def synthesize(descriptor: RequestDescriptor) -> Response:
    """Build a 200 response for a file or data URL without any network I/O."""
    if descriptor.scheme is Scheme.FILE:
        try:
            return _ok(Path(descriptor.path).read_bytes())
        except OSError as e:
            raise IoFailure(f"Cannot read {descriptor.path}: {e}") from e

    if descriptor.scheme is Scheme.DATA:
        return _ok(b"<html><body>" + (descriptor.inline_body or b"") + b"</body></html>")

    raise UnsupportedScheme(descriptor.scheme.value)


def fetch(descriptor: RequestDescriptor, user_agent: str | None = None) -> Response:
    """Fetch one resource; network streams are always closed afterwards."""
    if descriptor.scheme in (Scheme.FILE, Scheme.DATA):
        return synthesize(descriptor)

    if descriptor.scheme in (Scheme.HTTP, Scheme.HTTPS):
        with open_stream(descriptor) as stream:
            return read_response(stream, descriptor, user_agent or settings.user_agent)

    raise UnsupportedScheme(descriptor.scheme.value)
