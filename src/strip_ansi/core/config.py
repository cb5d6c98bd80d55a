"""Hierarchical configuration system for strip-ansi.

Loads configuration from multiple sources in priority order:
1. Built-in defaults (in code)
2. Global config: ~/.config/strip-ansi/config.toml
3. Project config: .strip-ansi/config.toml (searched in CWD and parents)
4. Environment variables: STRIP_ANSI_* prefix
5. CLI overrides (passed as kwargs)
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from strip_ansi.constants import (
    DEFAULT_ENCODING,
    DEFAULT_LOG_LEVEL,
    GLOBAL_CONFIG,
    PROJECT_CONFIG,
)
from strip_ansi.core.filter import check_encoding
from strip_ansi.core.models import ErrorPolicy

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class GeneralConfig(BaseModel):
    """General settings."""

    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v


class FilterConfig(BaseModel):
    """Line filter settings."""

    encoding: str = DEFAULT_ENCODING
    on_error: ErrorPolicy = ErrorPolicy.ABORT

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, v: str) -> str:
        return check_encoding(v)


class DisplayConfig(BaseModel):
    """Display and output settings."""

    color: bool = True


class StripAnsiConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


def _find_project_config() -> Path | None:
    """Walk up from CWD looking for .strip-ansi/config.toml.

    Returns:
        Path to project config file if found, None otherwise
    """
    current = Path.cwd()

    for parent in [current, *current.parents]:
        config_path = parent / PROJECT_CONFIG
        if config_path.exists():
            return config_path

    return None


def _load_toml(path: Path) -> dict:
    """Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML data as dict, or {} if file doesn't exist
    """
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # Skip this source rather than fail the whole run
        logger.warning("Failed to load %s: %s", path, e)
        return {}


def _merge_dicts(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with overriding values

    Returns:
        Merged dictionary (creates a new dict)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_vars(config: dict) -> dict:
    """Apply STRIP_ANSI_* environment variables to config.

    Args:
        config: Configuration dictionary

    Returns:
        Updated configuration dictionary
    """
    result = config.copy()

    env_mappings = {
        "STRIP_ANSI_LOG_LEVEL": ("general", "log_level"),
        "STRIP_ANSI_ENCODING": ("filter", "encoding"),
        "STRIP_ANSI_ON_ERROR": ("filter", "on_error"),
        "STRIP_ANSI_COLOR": ("display", "color"),
    }

    for env_var, (section, key) in env_mappings.items():
        value: Any = os.environ.get(env_var)
        if value is not None:
            # Copy the section so the caller's dict is left alone
            result[section] = dict(result.get(section, {}))

            if key == "color":
                value = value.lower() in ("true", "1", "yes", "on")

            result[section][key] = value

    return result


def load_config(config_file: Path | None = None, **cli_overrides: Any) -> StripAnsiConfig:
    """Load configuration from all sources and merge them.

    Sources are merged in priority order (later overrides earlier):
    1. Built-in defaults (Pydantic model defaults)
    2. Global config (~/.config/strip-ansi/config.toml)
    3. Project config (.strip-ansi/config.toml)
    4. Environment variables (STRIP_ANSI_*)
    5. CLI overrides (keyword arguments)

    Args:
        config_file: Explicit TOML file. Replaces sources 2 and 3.
        **cli_overrides: Configuration overrides from CLI
            Can use flat keys like log_level="debug" or nested dicts

    Returns:
        Validated StripAnsiConfig instance

    Raises:
        pydantic.ValidationError: If a merged value is invalid.

    Examples:
        >>> config = load_config()
        >>> config = load_config(log_level="debug")
        >>> config = load_config(filter={"on_error": "skip"})
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        config_dict = _merge_dicts(config_dict, _load_toml(config_file))
    else:
        global_config = _load_toml(GLOBAL_CONFIG)
        if global_config:
            config_dict = _merge_dicts(config_dict, global_config)

        project_config_path = _find_project_config()
        if project_config_path:
            project_config = _load_toml(project_config_path)
            if project_config:
                config_dict = _merge_dicts(config_dict, project_config)

    config_dict = _apply_env_vars(config_dict)

    if cli_overrides:
        # Flat keys belong to a known section
        flat_keys = {
            "log_level": "general",
            "encoding": "filter",
            "on_error": "filter",
            "color": "display",
        }
        cli_config: dict[str, Any] = {}

        for key, value in cli_overrides.items():
            if value is None:
                continue
            if key in flat_keys:
                cli_config.setdefault(flat_keys[key], {})[key] = value
            else:
                cli_config[key] = value

        config_dict = _merge_dicts(config_dict, cli_config)

    return StripAnsiConfig(**config_dict)
