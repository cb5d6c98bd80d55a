"""Configuration CLI commands.

Provides the `strip-ansi config` sub-commands for viewing and modifying
the configuration.
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import BaseModel, ValidationError

from strip_ansi.cli.formatters import (
    console,
    is_json_mode,
    print_error,
    print_info,
    print_json,
    print_success,
    print_warning,
)
from strip_ansi.constants import EXIT_ERROR

app = typer.Typer(help="Manage strip-ansi configuration", no_args_is_help=True)


@app.command("show")
def config_show(
    section: Optional[str] = typer.Argument(None, help="Config section (e.g. 'general', 'filter')"),
) -> None:
    """Show effective configuration (merged from all sources).

    Examples:
        strip-ansi config show
        strip-ansi config show filter
    """
    from strip_ansi.cli.app import state

    try:
        config = state.config
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(EXIT_ERROR)

    config_dict = config.model_dump(mode="json")

    if section:
        if section in config_dict:
            data = {section: config_dict[section]}
        else:
            print_error(f"Unknown config section: {section}")
            print_info(f"Available sections: {', '.join(config_dict.keys())}")
            raise typer.Exit(EXIT_ERROR)
    else:
        data = config_dict

    if is_json_mode():
        print_json(data)
        return

    from rich.panel import Panel

    lines: list[str] = []
    _format_dict(data, lines, indent=0)

    panel = Panel(
        "\n".join(lines),
        title="strip-ansi Configuration",
        title_align="left",
        border_style="blue",
    )
    console.print(panel)


@app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Config key (dot-notation, e.g. 'filter.on_error')"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a global configuration value.

    Values are written to ~/.config/strip-ansi/config.toml.
    Use dot notation for nested keys.

    Examples:
        strip-ansi config set filter.on_error skip
        strip-ansi config set filter.encoding latin-1
        strip-ansi config set display.color false
    """
    import tomllib

    import tomli_w

    from strip_ansi import constants
    from strip_ansi.core.config import StripAnsiConfig

    config_file = constants.GLOBAL_CONFIG

    existing: dict = {}
    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                existing = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            print_error(f"Cannot read {config_file}: {e}")
            raise typer.Exit(EXIT_ERROR)

    parts = key.split(".")
    if len(parts) != 2:
        print_error("Key must use dot notation (e.g. 'filter.on_error')")
        raise typer.Exit(EXIT_ERROR)

    # Auto-convert value types
    parsed_value: str | bool = value
    if value.lower() in ("true", "yes"):
        parsed_value = True
    elif value.lower() in ("false", "no"):
        parsed_value = False

    section, name = parts
    section_model = getattr(StripAnsiConfig(), section, None)
    if not isinstance(section_model, BaseModel) or name not in type(section_model).model_fields:
        print_error(f"Unknown config key: {key}")
        raise typer.Exit(EXIT_ERROR)

    target = existing.setdefault(section, {})
    if not isinstance(target, dict):
        print_error(f"'{section}' is not a config section")
        raise typer.Exit(EXIT_ERROR)
    target[name] = parsed_value

    # Refuse to write a file that would not load
    try:
        StripAnsiConfig(**existing)
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {e}")
        raise typer.Exit(EXIT_ERROR)

    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "wb") as f:
        tomli_w.dump(existing, f)

    print_success(f"Set {key} = {parsed_value}")
    print_info(f"Config file: {config_file}")


@app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults.

    Deletes the global config file at ~/.config/strip-ansi/config.toml.
    """
    from strip_ansi import constants

    config_file = constants.GLOBAL_CONFIG

    if not config_file.exists():
        print_info("No config file to reset (using defaults).")
        return

    if not force:
        print_warning(f"This will delete: {config_file}")
        confirm = typer.confirm("Are you sure?")
        if not confirm:
            print_info("Cancelled")
            return

    config_file.unlink()
    print_success("Configuration reset to defaults")


def _format_dict(data: dict, lines: list[str], indent: int = 0) -> None:
    """Recursively format a dict for display."""
    prefix = "  " * indent
    for key, value in data.items():
        if isinstance(value, dict):
            lines.append(f"{prefix}[bold]{key}:[/bold]")
            _format_dict(value, lines, indent + 1)
        else:
            lines.append(f"{prefix}[bold]{key}:[/bold] {value}")
