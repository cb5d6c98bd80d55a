"""
strip-ansi CLI - Rich-based Output Formatting

Provides both Rich (terminal) and JSON output formatting for CLI commands.
Filtered text never passes through these helpers; it is written to the
output stream as raw bytes by the strip command.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from strip_ansi.core.models import FilterStats, LineMatch
from strip_ansi.core.scanner import ScanStatus

# Console instances for normal and error output
console = Console()
error_console = Console(stderr=True)

# Global state for JSON mode
_json_mode = False


def set_json_mode(enabled: bool) -> None:
    """Enable or disable JSON output mode."""
    global _json_mode
    _json_mode = enabled


def is_json_mode() -> bool:
    """Check if JSON output mode is enabled."""
    return _json_mode


def set_color(enabled: bool) -> None:
    """Enable or disable colored Rich output."""
    console.no_color = not enabled
    error_console.no_color = not enabled


# --- Status styling ---

STATUS_STYLES = {
    ScanStatus.FOUND: ("green", "✓"),
    ScanStatus.MALFORMED: ("red", "✗"),
}


# --- Basic output functions ---

def print_success(message: str) -> None:
    """Print a success message in green."""
    if _json_mode:
        print_json({"status": "success", "message": message})
    else:
        console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message in red to stderr."""
    if _json_mode:
        print_json({"status": "error", "message": message}, err=True)
    else:
        error_console.print(f"[red]✗[/red] {escape(message)}", highlight=False, soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    if _json_mode:
        print_json({"status": "warning", "message": message})
    else:
        console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_info(message: str) -> None:
    """Print an informational message."""
    if _json_mode:
        print_json({"status": "info", "message": message})
    else:
        console.print(f"[cyan]ℹ[/cyan] {escape(message)}")


def print_json(data: Any, err: bool = False) -> None:
    """Print any data as formatted JSON."""
    stream = sys.stderr if err else sys.stdout
    print(json.dumps(data, indent=2, default=str), file=stream)


# --- Filter results ---

def print_filter_stats(stats: FilterStats) -> None:
    """Print run counters to stderr so they never mix with filtered output."""
    if _json_mode:
        print_json(stats.model_dump(mode="json"), err=True)
        return

    table = Table(title="Summary", title_style="bold cyan", show_header=False)
    table.add_column("Counter", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Lines read", str(stats.lines_read))
    table.add_row("Lines written", str(stats.lines_written))
    table.add_row("Sequences removed", str(stats.sequences_removed))
    table.add_row("Malformed lines", _count_text(stats.malformed_lines, "yellow"))
    table.add_row("Failed lines", _count_text(stats.failed_lines, "red"))

    error_console.print(table)


def print_scan_results(results: list[tuple[str, list[LineMatch]]]) -> None:
    """Print scan results per source as Rich tables or one JSON array."""
    if _json_mode:
        print_json(
            [
                {
                    "source": source,
                    "matches": [m.model_dump(mode="json") for m in matches],
                }
                for source, matches in results
            ]
        )
        return

    for source, matches in results:
        print_matches(matches, source)


def print_matches(matches: list[LineMatch], source: str) -> None:
    """Print the matches of one source as a Rich table."""
    if not matches:
        console.print(f"[dim]{escape(source)}: no escape sequences found.[/dim]", soft_wrap=True)
        return

    table = Table(title=escape(source), title_style="bold cyan")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Bytes", justify="right")
    table.add_column("Status")
    table.add_column("Sequence", style="magenta")

    for match in matches:
        color, icon = STATUS_STYLES.get(match.status, ("white", "?"))
        table.add_row(
            str(match.line_number),
            format_span(match),
            Text(f"{icon} {match.status.value}", style=color),
            Text(match.sequence),
        )

    console.print(table)


def format_span(match: LineMatch) -> str:
    """Format byte offsets as ``start-end``, or ``start-`` when unterminated."""
    if match.end is None:
        return f"{match.start}-"
    return f"{match.start}-{match.end}"


def _count_text(value: int, style: str) -> Text:
    """Highlight non-zero counters."""
    return Text(str(value), style=style if value else "")
