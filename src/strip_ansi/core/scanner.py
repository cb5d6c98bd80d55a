"""CSI sequence scanner.

Locates ECMA-48 Control Sequence Introducer sequences inside a byte buffer::

    ESC [  <parameter bytes>*  <intermediate bytes>*  <final byte>

Parameter bytes are 0x30-0x3F, intermediate bytes 0x20-0x2F and the final
byte 0x40-0x7E. The two runs are consumed in that fixed order: once the
intermediate run has started, a parameter byte ends the sequence.

The scanner never mutates the buffer and keeps no state between calls. It
reports one of three outcomes (see :class:`ScanStatus`) for the leftmost
introducer at or after the requested offset.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, NamedTuple, Optional

from strip_ansi.constants import CSI, FINAL_BYTES, INTERMEDIATE_BYTES, PARAMETER_BYTES

_PARAM_LO, _PARAM_HI = PARAMETER_BYTES
_INTER_LO, _INTER_HI = INTERMEDIATE_BYTES
_FINAL_LO, _FINAL_HI = FINAL_BYTES


class ScanStatus(str, Enum):
    """Outcome of a single scan."""

    NOT_FOUND = "not_found"
    FOUND = "found"
    MALFORMED = "malformed"


class CsiSpan(NamedTuple):
    """Inclusive byte offsets of a matched sequence.

    Attributes:
        start: Offset of the ESC byte of the introducer.
        end: Offset of the final byte.
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        """Number of bytes covered, introducer and final byte included."""
        return self.end - self.start + 1

    def slice(self) -> slice:
        """Return the equivalent half-open slice."""
        return slice(self.start, self.end + 1)


class ScanResult(NamedTuple):
    """Result of :func:`find_csi_sequence`.

    ``span`` is set only when ``status`` is FOUND. For MALFORMED results
    ``position`` holds the offset of the offending introducer; for FOUND it
    equals ``span.start``.
    """

    status: ScanStatus
    span: Optional[CsiSpan] = None
    position: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.status is ScanStatus.FOUND


NOT_FOUND = ScanResult(ScanStatus.NOT_FOUND)


def find_csi_sequence(data: bytes, start: int = 0) -> ScanResult:
    """Find the first CSI sequence in ``data`` at or after ``start``.

    Args:
        data: Buffer to scan (``bytes`` or ``bytearray``).
        start: Offset to begin the introducer search at.

    Returns:
        A FOUND result carrying the inclusive span of the sequence, a
        MALFORMED result when the leftmost introducer is not terminated by a
        valid final byte before the buffer ends, or NOT_FOUND when there is
        no introducer at all.
    """
    begin = data.find(CSI, start)
    if begin < 0:
        return NOT_FOUND

    size = len(data)
    pos = begin + len(CSI)

    while pos < size and _PARAM_LO <= data[pos] <= _PARAM_HI:
        pos += 1
    while pos < size and _INTER_LO <= data[pos] <= _INTER_HI:
        pos += 1

    if pos < size and _FINAL_LO <= data[pos] <= _FINAL_HI:
        return ScanResult(ScanStatus.FOUND, CsiSpan(begin, pos), begin)
    return ScanResult(ScanStatus.MALFORMED, None, begin)


def iter_csi_sequences(data: bytes) -> Iterator[ScanResult]:
    """Yield every sequence in ``data`` from left to right.

    Each matched sequence is yielded as a FOUND result. Scanning resumes
    right after the final byte of the previous match. If the scan stops on
    an unterminated introducer a single MALFORMED result is yielded last;
    nothing after it is examined.
    """
    cursor = 0
    while True:
        result = find_csi_sequence(data, cursor)
        if result.status is ScanStatus.NOT_FOUND:
            return
        yield result
        if result.status is ScanStatus.MALFORMED:
            return
        cursor = result.span.end + 1  # type: ignore[union-attr]
