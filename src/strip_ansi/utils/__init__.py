"""strip-ansi utility modules."""

from strip_ansi.utils.logging import configure_logging

__all__ = [
    # Logging
    "configure_logging",
]
