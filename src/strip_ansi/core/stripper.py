"""Remove well-formed CSI sequences from text.

Everything that is not part of a complete sequence is preserved byte for
byte, including an unterminated introducer and whatever follows it.
"""

from __future__ import annotations

import logging

from strip_ansi.core.errors import StripError
from strip_ansi.core.scanner import ScanResult, iter_csi_sequences

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"


def _strip_bytes(data: bytes) -> tuple[bytes, list[ScanResult]]:
    """Strip ``data`` and return the scan outcomes the result was built from."""
    out = bytearray()
    results: list[ScanResult] = []
    cursor = 0
    for result in iter_csi_sequences(data):
        results.append(result)
        if result.found:
            span = result.span
            out += data[cursor : span.start]
            cursor = span.end + 1

    out += data[cursor:]
    return bytes(out), results


def strip_ansi_bytes(data: bytes) -> bytes:
    """Return ``data`` with every well-formed CSI sequence removed.

    The buffer is consumed left to right. Plain text before each match is
    copied out and the match itself is dropped. When no further introducer
    exists, or the next one is malformed, the rest of the buffer is copied
    unchanged and the scan stops.
    """
    stripped, _ = _strip_bytes(data)
    return stripped


def strip_ansi_with_results(text: str) -> tuple[str, list[ScanResult]]:
    """Like :func:`strip_ansi`, also returning the scan outcomes.

    The outcomes hold every FOUND sequence and, if the scan stopped early,
    the final MALFORMED one. Offsets refer to the UTF-8 encoding of ``text``.
    """
    try:
        data = text.encode(_ENCODING)
    except UnicodeEncodeError as e:
        raise StripError(f"Input is not valid text: {e}") from e

    stripped, results = _strip_bytes(data)
    removed = len(data) - len(stripped)
    if not removed:
        return text, results
    logger.debug("Removed %d bytes of escape sequences", removed)

    try:
        return stripped.decode(_ENCODING), results
    except UnicodeDecodeError as e:
        raise StripError(f"Stripped output is not valid text: {e}") from e


def strip_ansi(text: str) -> str:
    """Remove ANSI CSI escape sequences from text.

    Args:
        text: Input text potentially containing ANSI codes.

    Returns:
        Text with all well-formed CSI sequences removed.

    Raises:
        StripError: If ``text`` cannot be encoded as UTF-8, or if the
            stripped bytes are not valid UTF-8. The latter cannot happen for
            valid input: CSI bytes are all ASCII and never occur inside a
            multi-byte character.
    """
    stripped, _ = strip_ansi_with_results(text)
    return stripped
