"""Logging setup for the command-line tool."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(level_name: str, verbose: bool = False) -> int:
    """Configure the root logger to write to stderr.

    Stdout carries the filtered text, so log records must never go there.

    Args:
        level_name: Level name from config (e.g. "warning").
        verbose: Force DEBUG regardless of ``level_name``.

    Returns:
        The numeric level that was applied.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    return level
