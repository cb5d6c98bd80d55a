"""strip-ansi CLI - ``scan`` command.

Lists the escape sequences found in files without modifying anything.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from strip_ansi.cli.formatters import print_error, print_scan_results
from strip_ansi.constants import EXIT_ERROR, EXIT_NOT_FOUND
from strip_ansi.core.filter import scan_lines
from strip_ansi.core.models import LineMatch
from strip_ansi.core.scanner import ScanStatus


def scan(
    files: Optional[list[Path]] = typer.Argument(
        None, help="Files to scan ('-' for stdin). Reads stdin when omitted."
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Exit with status 1 if any escape sequence is found.",
    ),
) -> None:
    """Show the escape sequences present in files or stdin.

    Byte offsets are relative to the start of each line.

    Examples:
        strip-ansi scan build.log
        strip-ansi --json scan build.log
        strip-ansi scan --check README.md
    """
    sources = [str(f) for f in files] if files else ["-"]

    results: list[tuple[str, list[LineMatch]]] = []
    for name in sources:
        if name == "-":
            results.append(("<stdin>", list(scan_lines(sys.stdin.buffer))))
            continue

        path = Path(name)
        if not path.is_file():
            print_error(f"File not found: {path}")
            raise typer.Exit(EXIT_NOT_FOUND)
        try:
            with open(path, "rb") as f:
                results.append((name, list(scan_lines(f))))
        except OSError as e:
            print_error(f"Cannot read {path}: {e.strerror or e}")
            raise typer.Exit(EXIT_ERROR)

    print_scan_results(results)

    if check and any(
        m.status is ScanStatus.FOUND for _, matches in results for m in matches
    ):
        raise typer.Exit(EXIT_ERROR)
