"""Tests for utility modules."""

from __future__ import annotations

import logging

from strip_ansi.utils.logging import configure_logging


class TestConfigureLogging:
    def test_level_from_name(self):
        assert configure_logging("error") == logging.ERROR
        assert logging.getLogger().level == logging.ERROR

    def test_verbose_forces_debug(self):
        assert configure_logging("error", verbose=True) == logging.DEBUG

    def test_unknown_name_falls_back_to_warning(self):
        assert configure_logging("chatty") == logging.WARNING

    def test_handler_writes_to_stderr(self, capsys):
        configure_logging("info")
        logging.getLogger("strip_ansi.test").info("hello from the logger")
        captured = capsys.readouterr()
        assert "hello from the logger" in captured.err
        assert captured.out == ""
