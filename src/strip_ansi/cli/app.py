"""strip-ansi CLI - Root Typer Application.

This is the entry point for the ``strip-ansi`` command. It defines the main
Typer app, global options (--json, --verbose, --config), and lazy-initialised
shared state that subcommands access via ``from strip_ansi.cli.app import state``.

Invoked without a subcommand the tool behaves as a plain filter:
``some-command | strip-ansi`` strips stdin to stdout.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from strip_ansi.cli.formatters import print_error, set_color, set_json_mode
from strip_ansi.constants import DEFAULT_LOG_LEVEL, EXIT_ERROR
from strip_ansi.utils.logging import configure_logging

# ---------------------------------------------------------------------------
# Main Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="strip-ansi",
    help="Strip ANSI CSI escape sequences from text streams.",
    rich_markup_mode="rich",
)


# ---------------------------------------------------------------------------
# Global state (lazy-initialised, accessible as ``from strip_ansi.cli.app import state``)
# ---------------------------------------------------------------------------


class AppState:
    """Shared state object that is populated by the root callback and consumed
    by every subcommand.
    """

    def __init__(self) -> None:
        self.json_mode: bool = False
        self.verbose: bool = False
        self.config_path: str | None = None

        self._config = None

    @property
    def config(self):
        """Load and cache the merged StripAnsiConfig."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self, **overrides: Any):
        """Load the config from the configured sources plus ``overrides``."""
        from strip_ansi.core.config import load_config

        config_file = Path(self.config_path) if self.config_path else None
        return load_config(config_file, **overrides)

    def reset(self) -> None:
        """Drop the cached config so the next access reloads it."""
        self._config = None


state = AppState()


# ---------------------------------------------------------------------------
# Root callback - processes global options before any subcommand runs
# ---------------------------------------------------------------------------


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON instead of Rich tables.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output (debug logging).",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to a TOML config file (overrides default locations).",
    ),
) -> None:
    """strip-ansi - remove terminal escape sequences from text."""
    state.reset()
    state.json_mode = json_output
    state.verbose = verbose
    state.config_path = config
    set_json_mode(json_output)

    try:
        cfg = state.config
    except ValidationError as e:
        configure_logging(DEFAULT_LOG_LEVEL, verbose)
        # Leave ``config`` commands usable so a broken file can be fixed
        if ctx.invoked_subcommand == "config":
            return
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(EXIT_ERROR)

    configure_logging(cfg.general.log_level, verbose)
    set_color(cfg.display.color)

    if ctx.invoked_subcommand is None:
        from strip_ansi.cli.strip_cmd import strip

        strip(files=None, output=None, on_error=None, encoding=None, stats=False)


# ---------------------------------------------------------------------------
# Register subcommand groups and top-level commands
# ---------------------------------------------------------------------------

from strip_ansi.cli import strip_cmd  # noqa: E402

app.command(name="strip")(strip_cmd.strip)

from strip_ansi.cli import scan_cmd  # noqa: E402

app.command(name="scan")(scan_cmd.scan)

# Config commands live under ``strip-ansi config <subcommand>``
from strip_ansi.cli import config_cmd  # noqa: E402

app.add_typer(config_cmd.app, name="config", help="Manage strip-ansi configuration.")

from strip_ansi.cli import system_cmd  # noqa: E402

app.command(name="version")(system_cmd.version)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point (referenced by ``[project.scripts]`` in pyproject.toml)."""
    app()
