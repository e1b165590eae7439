"""Shared fixtures: an in-memory stream and a one-shot loopback HTTP server."""

import io
import socket
import threading

import pytest
import structlog


class FakeStream:
    """Stream double that replays a canned reply and records what was written."""

    def __init__(self, reply: bytes):
        self.written = b""
        self.closed = False
        self._reply = io.BytesIO(reply)

    def write(self, data: bytes) -> None:
        self.written += data

    def readline(self) -> bytes:
        return self._reply.readline()

    def read(self) -> bytes:
        return self._reply.read()

    def close(self) -> None:
        self.closed = True


class BrokenStream(FakeStream):
    """Stream whose reads fail after the request is written."""

    def readline(self) -> bytes:
        raise ConnectionResetError("connection reset by peer")

    def read(self) -> bytes:
        raise ConnectionResetError("connection reset by peer")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configured by CLI runs, which binds a captured stderr."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def http_server():
    """Start a server that answers one connection with a canned reply.

    Returns a function taking the reply bytes and returning (port, requests),
    where ``requests`` collects the raw request bytes received. The reply is
    sent once the request headers arrive, or at once when
    ``wait_for_request`` is false.
    """
    servers = []

    def serve(reply: bytes, wait_for_request: bool = True):
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        requests: list[bytes] = []

        def handle():
            conn, _ = listener.accept()
            with conn:
                data = b""
                while wait_for_request and b"\r\n\r\n" not in data:
                    chunk = conn.recv(4096)
                    if not chunk:
                        break
                    data += chunk
                requests.append(data)
                conn.sendall(reply)

        thread = threading.Thread(target=handle, daemon=True)
        thread.start()
        servers.append((listener, thread))
        return listener.getsockname()[1], requests

    yield serve

    for listener, thread in servers:
        thread.join(timeout=5)
        listener.close()
