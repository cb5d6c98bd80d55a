"""strip-ansi: remove ANSI CSI escape sequences from text."""

from strip_ansi.constants import VERSION
from strip_ansi.core.errors import FilterError, StripError
from strip_ansi.core.scanner import (
    CsiSpan,
    ScanResult,
    ScanStatus,
    find_csi_sequence,
    iter_csi_sequences,
)
from strip_ansi.core.stripper import strip_ansi, strip_ansi_bytes

__version__ = VERSION

__all__ = [
    "__version__",
    # Scanner
    "CsiSpan",
    "ScanResult",
    "ScanStatus",
    "find_csi_sequence",
    "iter_csi_sequences",
    # Stripper
    "strip_ansi",
    "strip_ansi_bytes",
    # Errors
    "FilterError",
    "StripError",
]
