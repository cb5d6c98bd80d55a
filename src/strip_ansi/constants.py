"""Global constants and default paths."""

from __future__ import annotations

import os
from pathlib import Path

# Version
VERSION = "0.1.0"

# XDG-compliant default paths
CONFIG_DIR = Path(
    os.environ.get("STRIP_ANSI_CONFIG_DIR", "~/.config/strip-ansi")
).expanduser()

# Config file names
GLOBAL_CONFIG = CONFIG_DIR / "config.toml"
PROJECT_CONFIG = ".strip-ansi/config.toml"

# ECMA-48 CSI grammar (inclusive byte ranges)
CSI = b"\x1b["  # ESC [
PARAMETER_BYTES = (0x30, 0x3F)  # 0-9:;<=>?
INTERMEDIATE_BYTES = (0x20, 0x2F)  # space and !"#$%&'()*+,-./
FINAL_BYTES = (0x40, 0x7E)  # @A-Z[\]^_`a-z{|}~

# Filter defaults
DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "warning"

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2
