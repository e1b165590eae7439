"""URL parsing into request descriptors."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .errors import MalformedUrl, UnsupportedMediaType, UnsupportedScheme

DATA_PREFIX = "data:"
DEFAULT_SCHEME = "https"
DEFAULT_MEDIA_TYPE = "text/html"
SUPPORTED_MEDIA_TYPES = frozenset({"text/html"})


class Scheme(Enum):
    HTTP = "http"
    HTTPS = "https"
    FILE = "file"
    DATA = "data"

    @property
    def default_port(self) -> int | None:
        if self is Scheme.HTTP:
            return 80
        if self is Scheme.HTTPS:
            return 443
        return None


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to fetch one URL."""

    scheme: Scheme
    path: str
    host: str = ""
    port: int | None = None
    inline_body: bytes | None = None
    media_type: str | None = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def authority(self) -> str:
        """host:port for network schemes, empty otherwise."""
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"


def _normalize_headers(headers: Mapping[str, str] | None) -> Mapping[str, str]:
    normalized = {}
    for name, value in (headers or {}).items():
        normalized[name.strip().lower()] = value
    return MappingProxyType(normalized)


def _parse_port(port_text: str, default: int) -> int:
    """Parse an unsigned 16-bit port, falling back to ``default``."""
    if not (port_text.isascii() and port_text.isdigit()):
        return default
    port = int(port_text)
    if port > 0xFFFF:
        return default
    return port


def _resolve_data(url: str, headers: Mapping[str, str]) -> RequestDescriptor:
    remainder = url[len(DATA_PREFIX):]
    if "," not in remainder:
        raise MalformedUrl(f"Missing ',' in data URL: {url}")

    media_type, payload = remainder.split(",", 1)
    media_type = media_type.strip().lower() or DEFAULT_MEDIA_TYPE
    if media_type not in SUPPORTED_MEDIA_TYPES:
        raise UnsupportedMediaType(media_type)

    return RequestDescriptor(
        scheme=Scheme.DATA,
        path="",
        inline_body=payload.encode("utf-8"),
        media_type=media_type,
        headers=headers,
    )


def resolve(url: str, headers: Mapping[str, str] | None = None) -> RequestDescriptor:
    """
    Parse a URL into a RequestDescriptor.

    Accepts ``data:[media-type],payload``, ``file://path`` and
    ``[scheme://]host[:port][/path]`` with scheme http or https (https when
    omitted). A malformed port silently falls back to the scheme default.

    Raises:
        UnsupportedScheme, UnsupportedMediaType, MalformedUrl
    """
    extra_headers = _normalize_headers(headers)

    if url.startswith(DATA_PREFIX):
        return _resolve_data(url, extra_headers)

    if "://" in url:
        scheme_text, rest = url.split("://", 1)
    else:
        scheme_text, rest = DEFAULT_SCHEME, url

    if scheme_text not in ("http", "https", "file"):
        raise UnsupportedScheme(scheme_text)
    scheme = Scheme(scheme_text)

    if scheme is Scheme.FILE:
        return RequestDescriptor(scheme=scheme, path=rest, headers=extra_headers)

    authority, _, path = rest.partition("/")
    host, _, port_text = authority.partition(":")
    if not host:
        raise MalformedUrl(f"Missing host in URL: {url}")

    return RequestDescriptor(
        scheme=scheme,
        host=host,
        port=_parse_port(port_text, scheme.default_port),
        path="/" + path,
        headers=extra_headers,
    )
