"""Body decoding with incremental charset detection."""

from dataclasses import dataclass
from enum import Enum

import structlog
from chardet.universaldetector import UniversalDetector

from .config import settings
from .errors import UndecodableCharset

logger = structlog.get_logger()


class Provenance(Enum):
    UTF8 = "utf-8"
    DETECTED = "detected"


@dataclass(frozen=True)
class DecodedText:
    """Decoded body text and how it was obtained."""

    text: str
    provenance: Provenance
    encoding: str


def _chunks(data: bytes, size: int):
    """Yield (chunk, is_last) pairs."""
    for start in range(0, len(data), size):
        yield data[start:start + size], start + size >= len(data)


def _try_decode(body: bytes, encoding: str | None) -> str | None:
    if not encoding:
        return None
    try:
        return body.decode(encoding)
    except (LookupError, UnicodeDecodeError):
        return None


def decode(body: bytes, chunk_size: int | None = None) -> DecodedText:
    """
    Decode a response body.

    Exact UTF-8 is tried first. Otherwise the body is fed to a chardet
    detector ``chunk_size`` bytes at a time; once non-ASCII bytes have been
    seen, the detector's current guess is used to decode the whole
    body, and the first guess that decodes cleanly wins.

    Raises:
        UndecodableCharset: no guess decoded the body without errors.
    """
    try:
        return DecodedText(body.decode("utf-8"), Provenance.UTF8, "utf-8")
    except UnicodeDecodeError:
        pass

    size = settings.detect_chunk_size if chunk_size is None else chunk_size
    if size < 1:
        raise ValueError(f"chunk_size must be positive, got {size}")

    detector = UniversalDetector()
    seen_non_ascii = False
    for chunk, is_last in _chunks(body, size):
        detector.feed(chunk)
        if is_last:
            detector.close()
        seen_non_ascii = seen_non_ascii or any(byte >= 0x80 for byte in chunk)
        if not seen_non_ascii:
            continue
        # Only a confident or final result counts as a guess.
        if not (detector.done or is_last):
            continue

        guess = detector.result.get("encoding")
        text = _try_decode(body, guess)
        if text is not None:
            logger.debug("charset_detected", encoding=guess,
                         confidence=detector.result.get("confidence"))
            return DecodedText(text, Provenance.DETECTED, guess)
        logger.debug("charset_guess_rejected", encoding=guess)
        if detector.done and not is_last:
            # A finished detector will not change its mind.
            break

    raise UndecodableCharset()
