"""Errors raised while fetching and rendering a page.

Every error is terminal for the fetch that raised it. ``str(error)`` is the
text shown to the user in place of page content.
"""


class BrowserError(Exception):
    """Base class for all fetch failures."""


class UnsupportedScheme(BrowserError):
    def __init__(self, scheme: str):
        super().__init__(f"Unsupported scheme: {scheme}")
        self.scheme = scheme


class UnsupportedMediaType(BrowserError):
    def __init__(self, media_type: str):
        super().__init__(f"Unsupported data media type: {media_type}")
        self.media_type = media_type


class MalformedUrl(BrowserError):
    """The URL (or the server's status line) could not be parsed."""


class MalformedResponse(MalformedUrl):
    """The status line or a header line could not be parsed."""


class ConnectionFailed(BrowserError):
    """TCP connect, DNS lookup or TLS handshake failed."""


class IoFailure(BrowserError):
    """A read or write failed after the stream was opened."""


class UndecodableCharset(BrowserError):
    def __init__(self):
        super().__init__("Cannot guess charset")
