"""strip-ansi CLI - ``strip`` command.

Filters files (or stdin) line by line and writes the stripped text to
stdout or ``--output``. Registered on the root app and also run by the root
callback when no subcommand is given.
"""

from __future__ import annotations

import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO, Optional

import typer
from pydantic import ValidationError

from strip_ansi.cli.formatters import print_error, print_filter_stats
from strip_ansi.constants import EXIT_ERROR, EXIT_NOT_FOUND
from strip_ansi.core.errors import FilterError
from strip_ansi.core.filter import filter_lines
from strip_ansi.core.models import ErrorPolicy, FilterStats

logger = logging.getLogger(__name__)

STDIN_NAME = "-"


def _check_inputs(files: list[Path], output: Optional[Path]) -> None:
    """Fail before writing anything if an input is missing or is the output."""
    for path in files:
        if str(path) != STDIN_NAME and not path.is_file():
            print_error(f"File not found: {path}")
            raise typer.Exit(EXIT_NOT_FOUND)

    if output is None or not output.exists():
        return
    for path in files:
        if str(path) != STDIN_NAME and path.samefile(output):
            print_error(f"Output file is also an input: {output}")
            raise typer.Exit(EXIT_ERROR)


def _open(stack: ExitStack, path: Path, mode: str) -> BinaryIO:
    try:
        return stack.enter_context(open(path, mode))
    except OSError as e:
        print_error(f"Cannot open {path}: {e.strerror or e}")
        raise typer.Exit(EXIT_ERROR)


def strip(
    files: Optional[list[Path]] = typer.Argument(
        None, help="Input files ('-' for stdin). Reads stdin when omitted."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout."
    ),
    on_error: Optional[ErrorPolicy] = typer.Option(
        None,
        "--on-error",
        case_sensitive=False,
        help="What to do with a line that cannot be decoded: abort, skip or passthrough.",
    ),
    encoding: Optional[str] = typer.Option(
        None, "--encoding", "-e", help="Input and output text encoding."
    ),
    stats: bool = typer.Option(
        False, "--stats", help="Print a summary to stderr when done."
    ),
) -> None:
    """Remove ANSI CSI escape sequences from files or stdin.

    Examples:
        ls --color=always | strip-ansi
        strip-ansi strip build.log -o build.txt
        strip-ansi strip --on-error skip --stats build.log
    """
    from strip_ansi.cli.app import state

    try:
        config = state.load_config(on_error=on_error, encoding=encoding)
    except ValidationError as e:
        print_error(f"Invalid option: {e}")
        raise typer.Exit(EXIT_ERROR)

    sources = list(files) if files else [Path(STDIN_NAME)]
    _check_inputs(sources, output)

    total = FilterStats()
    with ExitStack() as stack:
        # Inputs are opened first so a bad input never truncates the output
        streams: list[tuple[str, BinaryIO]] = []
        for path in sources:
            name = str(path)
            if name == STDIN_NAME:
                streams.append((name, sys.stdin.buffer))
            else:
                streams.append((name, _open(stack, path, "rb")))

        if output is not None:
            sink = _open(stack, output, "wb")
        else:
            sink = sys.stdout.buffer

        for name, source in streams:
            logger.debug("Filtering %s", name)
            try:
                result = filter_lines(
                    source,
                    sink,
                    encoding=config.filter.encoding,
                    on_error=config.filter.on_error,
                )
            except FilterError as e:
                print_error(f"{name}: {e}")
                raise typer.Exit(EXIT_ERROR)
            total.add(result)

    if stats:
        print_filter_stats(total)
