"""
strip-ansi - Core Data Models

Pydantic v2 models shared by the line filter and the CLI.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from strip_ansi.core.scanner import ScanStatus


class ErrorPolicy(str, Enum):
    """What the line filter does with a line it cannot process."""

    ABORT = "abort"
    SKIP = "skip"
    PASSTHROUGH = "passthrough"


class FilterStats(BaseModel):
    """Counters collected over one filter run."""

    lines_read: int = 0
    lines_written: int = 0
    sequences_removed: int = 0
    malformed_lines: int = 0
    failed_lines: int = 0

    def add(self, other: FilterStats) -> None:
        """Accumulate another run's counters into this one."""
        for name in type(self).model_fields:
            setattr(self, name, getattr(self, name) + getattr(other, name))


class LineMatch(BaseModel):
    """A sequence, or malformed introducer, found on an input line.

    Offsets are byte offsets into the line with its terminator removed.
    ``end`` is inclusive and unset for malformed introducers.
    """

    line_number: int = Field(ge=1)
    status: ScanStatus
    start: int = Field(ge=0)
    end: Optional[int] = None
    sequence: str
