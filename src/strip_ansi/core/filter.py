"""Line-oriented driver around the stripper.

Reads lines from a binary stream, removes CSI sequences from each one and
writes the result followed by ``\\n``. Lines are decoded individually so a
single undecodable line can be handled according to an :class:`ErrorPolicy`
without losing the rest of the stream.
"""

from __future__ import annotations

import codecs
import logging
from typing import BinaryIO, Iterable, Iterator

from strip_ansi.constants import DEFAULT_ENCODING
from strip_ansi.core.errors import FilterError, StripError
from strip_ansi.core.models import ErrorPolicy, FilterStats, LineMatch
from strip_ansi.core.scanner import ScanStatus, iter_csi_sequences
from strip_ansi.core.stripper import strip_ansi_with_results

logger = logging.getLogger(__name__)

# Bytes of context shown after a malformed introducer
MALFORMED_PREVIEW = 16

# Bytes the filter relies on being encoded as plain ASCII
ASCII_CONTROLS = "\x1b[\n"


def _chomp(raw: bytes) -> bytes:
    """Drop a trailing ``\\n`` or ``\\r\\n``."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def _printable(chunk: bytes) -> str:
    """Render raw bytes with control characters escaped."""
    return chunk.decode("latin-1").encode("unicode_escape").decode("ascii")


def check_encoding(encoding: str) -> str:
    """Return ``encoding`` if lines can be filtered with it.

    The codec must be a text encoding that keeps ``ESC``, ``[`` and ``\\n``
    as their single ASCII bytes, since lines are split and scanned on raw
    bytes.

    Raises:
        ValueError: If the codec is unknown or unsuitable.
    """
    try:
        info = codecs.lookup(encoding)
    except LookupError:
        raise ValueError(f"Unknown encoding: {encoding}") from None
    if not info._is_text_encoding:
        raise ValueError(f"Not a text encoding: {encoding}")

    try:
        encoded = ASCII_CONTROLS.encode(encoding)
    except UnicodeError:
        encoded = None
    if encoded != ASCII_CONTROLS.encode("ascii"):
        raise ValueError(f"Encoding is not ASCII-compatible: {encoding}")
    return encoding


def _strip_line(line: bytes, encoding: str, stats: FilterStats) -> bytes:
    """Strip one terminator-less line, updating ``stats``.

    Raises:
        UnicodeError: If the line does not decode (or re-encode) with
            ``encoding``.
        StripError: If the stripper rejects the text.
    """
    text, results = strip_ansi_with_results(line.decode(encoding))
    cleaned = text.encode(encoding)

    found = sum(1 for result in results if result.found)
    stats.sequences_removed += found
    if len(results) > found:
        stats.malformed_lines += 1
    return cleaned


def filter_lines(
    source: Iterable[bytes],
    sink: BinaryIO,
    *,
    encoding: str = DEFAULT_ENCODING,
    on_error: ErrorPolicy = ErrorPolicy.ABORT,
) -> FilterStats:
    """Copy ``source`` to ``sink`` line by line with CSI sequences removed.

    Args:
        source: Binary stream (or any iterable of byte lines).
        sink: Binary stream receiving the stripped lines.
        encoding: Text encoding of the input, also used for the output.
        on_error: Policy for lines that fail to decode or strip.

    Returns:
        Counters for the run.

    Raises:
        ValueError: If ``encoding`` cannot be used for line filtering.
        FilterError: If a line fails and ``on_error`` is ABORT. Lines before
            it have already been written.
    """
    check_encoding(encoding)
    stats = FilterStats()

    for line_number, raw in enumerate(source, start=1):
        stats.lines_read += 1
        line = _chomp(raw)

        try:
            cleaned = _strip_line(line, encoding, stats)
        except (UnicodeError, StripError) as e:
            stats.failed_lines += 1
            if on_error is ErrorPolicy.ABORT:
                raise FilterError(line_number, str(e)) from e
            if on_error is ErrorPolicy.SKIP:
                logger.warning("Skipping line %d: %s", line_number, e)
                continue
            logger.warning("Passing line %d through unchanged: %s", line_number, e)
            cleaned = line

        sink.write(cleaned)
        sink.write(b"\n")
        stats.lines_written += 1

    sink.flush()
    logger.debug(
        "Filtered %d lines, removed %d sequences",
        stats.lines_read,
        stats.sequences_removed,
    )
    return stats


def scan_lines(source: Iterable[bytes]) -> Iterator[LineMatch]:
    """Report every sequence and malformed introducer, line by line.

    Scanning works on raw bytes, so no decoding is involved and offsets are
    byte offsets into each line.
    """
    for line_number, raw in enumerate(source, start=1):
        line = _chomp(raw)
        for result in iter_csi_sequences(line):
            if result.status is ScanStatus.FOUND:
                span = result.span
                yield LineMatch(
                    line_number=line_number,
                    status=result.status,
                    start=span.start,
                    end=span.end,
                    sequence=_printable(line[span.slice()]),
                )
            else:
                start = result.position
                yield LineMatch(
                    line_number=line_number,
                    status=result.status,
                    start=start,
                    sequence=_printable(line[start : start + MALFORMED_PREVIEW]),
                )
