"""Protocol definitions for fetch components."""

from dataclasses import dataclass, field
from typing import Protocol

from ..charset import decode


@dataclass(frozen=True)
class Response:
    """Parsed HTTP response, or one synthesized for file and data URLs."""

    version: str
    status: int
    reason: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status == 200

    @property
    def text(self) -> str:
        """Decode the body, guessing the charset if it is not UTF-8."""
        return decode(self.body).text


class Stream(Protocol):
    """A byte stream that is written once, then read sequentially."""

    def write(self, data: bytes) -> None:
        """Send all of ``data``."""
        ...

    def readline(self) -> bytes:
        """Read through the next LF; empty at end of stream."""
        ...

    def read(self) -> bytes:
        """Read everything until the peer closes the stream."""
        ...

    def close(self) -> None:
        ...
