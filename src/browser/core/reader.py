"""HTTP/1.1 request framing and response parsing over a Stream."""

import structlog

from ..errors import IoFailure, MalformedResponse
from ..url import RequestDescriptor
from .protocols import Response, Stream

logger = structlog.get_logger()

# Encoding of the status line and header lines read back.
HEADER_ENCODING = "iso-8859-1"
HTTP_VERSION = "HTTP/1.1"
_FIXED_HEADERS = frozenset({"host", "connection", "user-agent"})


def build_request(descriptor: RequestDescriptor, user_agent: str) -> bytes:
    """Frame a GET request that asks the peer to close when done."""
    lines = [
        f"GET {descriptor.path} {HTTP_VERSION}",
        f"Host: {descriptor.host}",
        "Connection: close",
        f"User-Agent: {user_agent}",
    ]
    for name, value in descriptor.headers.items():
        if name in _FIXED_HEADERS:
            continue
        lines.append(f"{name}: {value}")

    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")


def _readline(stream: Stream) -> str | None:
    """Read one line without its line ending; None at end of stream."""
    try:
        raw = stream.readline()
    except OSError as e:
        raise IoFailure(f"Read failed: {e}") from e
    if not raw:
        return None
    return raw.decode(HEADER_ENCODING).rstrip("\r\n")


def parse_status_line(line: str) -> tuple[str, int, str]:
    """Split ``VERSION SP CODE SP REASON`` into its parts."""
    if " " not in line:
        raise MalformedResponse(f"Malformed status line: {line!r}")
    version, rest = line.split(" ", 1)
    if " " not in rest:
        raise MalformedResponse(f"Malformed status line: {line!r}")
    code_text, reason = rest.split(" ", 1)

    if not (code_text.isascii() and code_text.isdigit()):
        raise MalformedResponse(f"Malformed status code: {code_text!r}")
    status = int(code_text)
    if not 100 <= status <= 599:
        raise MalformedResponse(f"Status code out of range: {status}")

    return version, status, reason


def read_headers(stream: Stream) -> dict[str, str]:
    """Read ``Name: value`` lines up to the blank line; last duplicate wins."""
    headers = {}
    while True:
        line = _readline(stream)
        if not line:
            break
        if ":" not in line:
            raise MalformedResponse(f"Malformed header line: {line!r}")
        name, value = line.split(":", 1)
        headers[name.strip().lower()] = value.strip()
    return headers


def read_response(stream: Stream, descriptor: RequestDescriptor, user_agent: str) -> Response:
    """
    Send the request for ``descriptor`` and parse the reply.

    A non-200 status stops reading after the status line: the response
    carries the reason phrase as its body and no headers. A 200 response
    reads headers, then every remaining byte until the peer closes.

    Raises:
        IoFailure: write or read failed mid-stream.
        MalformedResponse: the status line or a header line is unparseable.
    """
    try:
        stream.write(build_request(descriptor, user_agent))
    except OSError as e:
        raise IoFailure(f"Write failed: {e}") from e

    status_line = _readline(stream)
    if status_line is None:
        raise MalformedResponse("Connection closed before status line")
    version, status, reason = parse_status_line(status_line)

    if status != 200:
        # The real body is not read; the reason phrase stands in for it.
        logger.info("response_not_ok", status=status, reason=reason)
        return Response(
            version=version,
            status=status,
            reason=reason,
            headers={},
            body=reason.encode("utf-8"),
        )

    headers = read_headers(stream)
    try:
        body = stream.read()
    except OSError as e:
        raise IoFailure(f"Read failed: {e}") from e

    return Response(
        version=version,
        status=status,
        reason=reason,
        headers=headers,
        body=body,
    )
