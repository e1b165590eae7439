"""One fetch: resolve, transport, read, decode, extract."""

from typing import Mapping

import structlog

from .charset import Provenance, decode
from .core import Response, fetch
from .errors import BrowserError
from .extract import extract
from .url import resolve

logger = structlog.get_logger()


def fetch_url(url: str, headers: Mapping[str, str] | None = None) -> Response:
    """Resolve ``url`` and fetch it, returning the raw response."""
    descriptor = resolve(url, headers)
    logger.info("fetch_started", url=url, scheme=descriptor.scheme.value,
                authority=descriptor.authority)
    response = fetch(descriptor)
    logger.info("response_received", url=url, status=response.status,
                body_bytes=len(response.body))
    return response


def response_text(response: Response) -> str:
    """Decoded body of ``response``, logging when the charset was guessed."""
    decoded = decode(response.body)
    if decoded.provenance is Provenance.DETECTED:
        logger.info("charset_detected", encoding=decoded.encoding)
    return decoded.text


def load(url: str, headers: Mapping[str, str] | None = None) -> str:
    """
    Fetch ``url`` and return its displayable text.

    Raises:
        BrowserError: any failure along the way; nothing partial is returned.
    """
    response = fetch_url(url, headers)
    return extract(response.status, response_text(response))


def render(url: str, headers: Mapping[str, str] | None = None) -> str:
    """Like load(), but a failure becomes its error message."""
    try:
        return load(url, headers)
    except BrowserError as e:
        logger.warning("fetch_failed", url=url, error=str(e), kind=type(e).__name__)
        return str(e)
