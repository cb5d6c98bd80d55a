"""Shared test fixtures for the strip-ansi test suite."""

from __future__ import annotations

import logging

import pytest

from strip_ansi.cli.formatters import set_color, set_json_mode

ENV_VARS = (
    "STRIP_ANSI_LOG_LEVEL",
    "STRIP_ANSI_ENCODING",
    "STRIP_ANSI_ON_ERROR",
    "STRIP_ANSI_COLOR",
)


@pytest.fixture(autouse=True)
def global_config(tmp_path, monkeypatch):
    """Point the global config at a temp dir and run from an empty CWD.

    Returns the path of the (not yet existing) global config file.
    """
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.toml"
    monkeypatch.setattr("strip_ansi.constants.CONFIG_DIR", config_dir)
    monkeypatch.setattr("strip_ansi.constants.GLOBAL_CONFIG", config_file)
    monkeypatch.setattr("strip_ansi.core.config.GLOBAL_CONFIG", config_file)

    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return config_file


@pytest.fixture(autouse=True)
def restore_output_state():
    """Undo global logging and formatter changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    set_json_mode(False)
    set_color(True)


@pytest.fixture
def write_file(tmp_path):
    """Write bytes to a file under tmp_path and return its path."""

    def _write(name: str, data: bytes):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write
