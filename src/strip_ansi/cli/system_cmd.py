"""strip-ansi CLI - System commands: version.

Registered directly on the root Typer app so it appears as
``strip-ansi version``.
"""

from __future__ import annotations

import sys

from strip_ansi import __version__
from strip_ansi.cli.formatters import console, is_json_mode, print_json


def version() -> None:
    """Show strip-ansi and Python versions."""
    python = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

    if is_json_mode():
        print_json({"version": __version__, "python": python})
        return

    console.print(f"[bold]strip-ansi[/bold] v{__version__}")
    console.print(f"[dim]Python {python}[/dim]")
