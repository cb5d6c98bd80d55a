"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from strip_ansi import __version__
from strip_ansi.cli.app import app

COLORED = b"Hello, \x1b[1mworld\x1b[0m!\n\x1b[31mred\x1b[0m\n"


@pytest.fixture
def runner():
    return CliRunner()


class TestStripCommand:
    def test_stdin_to_stdout(self, runner):
        result = runner.invoke(app, ["strip"], input=COLORED)
        assert result.exit_code == 0
        assert result.stdout_bytes == b"Hello, world!\nred\n"

    def test_no_subcommand_filters_stdin(self, runner):
        result = runner.invoke(app, [], input=COLORED)
        assert result.exit_code == 0
        assert result.stdout_bytes == b"Hello, world!\nred\n"

    def test_files_to_output(self, runner, write_file, tmp_path):
        first = write_file("one.log", b"\x1b[32mone\x1b[0m\n")
        second = write_file("two.log", b"two\x1b[K\n")
        out = tmp_path / "out.txt"

        result = runner.invoke(app, ["strip", str(first), str(second), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_bytes() == b"one\ntwo\n"

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["strip", str(tmp_path / "missing.log")])
        assert result.exit_code == 2
        assert "File not found" in result.output

    def test_undecodable_line_aborts(self, runner, write_file, tmp_path):
        src = write_file("bad.log", b"ok\n\xff\nafter\n")
        out = tmp_path / "out.txt"
        result = runner.invoke(app, ["strip", str(src), "-o", str(out)])
        assert result.exit_code == 1
        assert "line 2" in result.output
        assert out.read_bytes() == b"ok\n"

    def test_skip_policy(self, runner, write_file, tmp_path):
        src = write_file("bad.log", b"ok\n\xff\nafter\n")
        out = tmp_path / "out.txt"
        result = runner.invoke(
            app, ["strip", str(src), "-o", str(out), "--on-error", "skip"]
        )
        assert result.exit_code == 0
        assert out.read_bytes() == b"ok\nafter\n"

    def test_policy_from_config_file(self, runner, write_file, tmp_path):
        src = write_file("bad.log", b"\xff\x1b[1m\n")
        cfg = write_file("cfg.toml", b'[filter]\non_error = "passthrough"\n')
        out = tmp_path / "out.txt"
        result = runner.invoke(app, ["--config", str(cfg), "strip", str(src), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_bytes() == b"\xff\x1b[1m\n"

    def test_encoding_option(self, runner, write_file, tmp_path):
        src = write_file("latin.log", b"caf\xe9\x1b[0m\n")
        out = tmp_path / "out.txt"
        result = runner.invoke(app, ["strip", str(src), "-o", str(out), "-e", "latin-1"])
        assert result.exit_code == 0
        assert out.read_bytes() == b"caf\xe9\n"

    def test_unknown_encoding(self, runner):
        result = runner.invoke(app, ["strip", "--encoding", "bogus"], input=b"x\n")
        assert result.exit_code == 1
        assert "Invalid option" in result.output

    @pytest.mark.parametrize("encoding", ["hex", "utf-16"])
    def test_unusable_encoding(self, runner, encoding):
        result = runner.invoke(app, ["strip", "--encoding", encoding], input=b"x\n")
        assert result.exit_code == 1
        assert "Invalid option" in result.output

    def test_output_same_as_input_refused(self, runner, write_file):
        src = write_file("in.log", b"\x1b[1mkeep me\n")
        result = runner.invoke(app, ["strip", str(src), "-o", str(src)])
        assert result.exit_code == 1
        assert "also an input" in result.output
        assert src.read_bytes() == b"\x1b[1mkeep me\n"

    def test_output_same_as_input_via_other_path(self, runner, write_file, tmp_path):
        src = write_file("in.log", b"\x1b[1mkeep me\n")
        alias = tmp_path / "work" / ".." / "in.log"
        result = runner.invoke(app, ["strip", str(src), "-o", str(alias)])
        assert result.exit_code == 1
        assert src.read_bytes() == b"\x1b[1mkeep me\n"

    def test_output_in_missing_directory(self, runner, write_file, tmp_path):
        src = write_file("in.log", b"x\n")
        out = tmp_path / "no" / "out.txt"
        result = runner.invoke(app, ["strip", str(src), "-o", str(out)])
        assert result.exit_code == 1
        assert "Cannot open" in result.output
        assert not out.exists()

    def test_unreadable_input_leaves_output_alone(
        self, runner, write_file, tmp_path, monkeypatch
    ):
        out = write_file("out.txt", b"previous\n")
        folder = tmp_path / "folder"
        folder.mkdir()
        monkeypatch.setattr(Path, "is_file", lambda self: True)
        result = runner.invoke(app, ["strip", str(folder), "-o", str(out)])
        assert result.exit_code == 1
        assert "Cannot open" in result.output
        assert out.read_bytes() == b"previous\n"

    def test_stats_json(self, runner, write_file, tmp_path):
        src = write_file("in.log", COLORED)
        out = tmp_path / "out.txt"
        result = runner.invoke(app, ["--json", "strip", str(src), "-o", str(out), "--stats"])
        assert result.exit_code == 0
        assert '"sequences_removed": 4' in result.output

    def test_stats_table(self, runner, write_file, tmp_path):
        src = write_file("in.log", COLORED)
        result = runner.invoke(
            app, ["strip", str(src), "-o", str(tmp_path / "out.txt"), "--stats"]
        )
        assert result.exit_code == 0
        assert "Sequences removed" in result.output

    def test_invalid_global_config(self, runner, global_config):
        global_config.parent.mkdir(parents=True)
        global_config.write_text('[filter]\non_error = "explode"\n')
        result = runner.invoke(app, ["strip"], input=b"x\n")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestScanCommand:
    def test_json(self, runner, write_file):
        src = write_file("in.log", b"a\x1b[31mb\n\x1b[12")
        result = runner.invoke(app, ["--json", "scan", str(src)])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data[0]["source"] == str(src)
        matches = data[0]["matches"]
        assert [m["status"] for m in matches] == ["found", "malformed"]
        assert matches[0]["start"] == 1
        assert matches[0]["end"] == 5
        assert matches[0]["sequence"] == "\\x1b[31m"
        assert matches[1]["line_number"] == 2

    def test_table(self, runner, write_file):
        src = write_file("in.log", b"a\x1b[31mb\n")
        result = runner.invoke(app, ["scan", str(src)])
        assert result.exit_code == 0
        assert "found" in result.output

    def test_stdin(self, runner):
        result = runner.invoke(app, ["--json", "scan"], input=b"\x1b[m\n")
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["source"] == "<stdin>"

    def test_check_fails_on_sequences(self, runner, write_file):
        src = write_file("in.log", b"\x1b[1mbold\n")
        result = runner.invoke(app, ["scan", "--check", str(src)])
        assert result.exit_code == 1

    def test_check_passes_on_plain_text(self, runner, write_file):
        src = write_file("in.log", b"plain\n")
        result = runner.invoke(app, ["scan", "--check", str(src)])
        assert result.exit_code == 0
        assert "no escape sequences found" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_unreadable_file(self, runner, tmp_path, monkeypatch):
        folder = tmp_path / "folder"
        folder.mkdir()
        monkeypatch.setattr(Path, "is_file", lambda self: True)
        result = runner.invoke(app, ["scan", str(folder)])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_same_file_twice_listed_twice(self, runner, write_file):
        src = write_file("in.log", b"\x1b[1mx\n")
        result = runner.invoke(app, ["--json", "scan", str(src), str(src)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [entry["source"] for entry in data] == [str(src), str(src)]
        assert all(len(entry["matches"]) == 1 for entry in data)


class TestVersionCommand:
    def test_plain(self, runner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_json(self, runner):
        result = runner.invoke(app, ["--json", "version"])
        assert json.loads(result.stdout)["version"] == __version__


class TestConfigCommands:
    def test_show_json(self, runner):
        result = runner.invoke(app, ["--json", "config", "show"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["filter"] == {"encoding": "utf-8", "on_error": "abort"}

    def test_show_section(self, runner):
        result = runner.invoke(app, ["--json", "config", "show", "general"])
        assert json.loads(result.stdout) == {"general": {"log_level": "warning"}}

    def test_show_unknown_section(self, runner):
        result = runner.invoke(app, ["config", "show", "nope"])
        assert result.exit_code == 1

    def test_show_panel(self, runner):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "on_error" in result.output

    def test_set_then_show(self, runner, global_config):
        result = runner.invoke(app, ["config", "set", "filter.on_error", "skip"])
        assert result.exit_code == 0
        assert 'on_error = "skip"' in global_config.read_text()

        result = runner.invoke(app, ["--json", "config", "show", "filter"])
        assert json.loads(result.stdout)["filter"]["on_error"] == "skip"

    def test_set_bool(self, runner, global_config):
        result = runner.invoke(app, ["config", "set", "display.color", "false"])
        assert result.exit_code == 0
        assert "color = false" in global_config.read_text()

    def test_set_unknown_key(self, runner, global_config):
        result = runner.invoke(app, ["config", "set", "filter.nope", "1"])
        assert result.exit_code == 1
        assert not global_config.exists()

    def test_set_invalid_value(self, runner, global_config):
        result = runner.invoke(app, ["config", "set", "filter.on_error", "explode"])
        assert result.exit_code == 1
        assert not global_config.exists()

    def test_set_requires_dotted_key(self, runner):
        result = runner.invoke(app, ["config", "set", "on_error", "skip"])
        assert result.exit_code == 1

    def test_reset(self, runner, global_config):
        global_config.parent.mkdir(parents=True)
        global_config.write_text('[filter]\non_error = "skip"\n')
        result = runner.invoke(app, ["config", "reset", "--force"])
        assert result.exit_code == 0
        assert not global_config.exists()

    def test_reset_without_file(self, runner):
        result = runner.invoke(app, ["config", "reset", "--force"])
        assert result.exit_code == 0
        assert "No config file" in result.output

    def test_reset_still_works_with_broken_config(self, runner, global_config):
        global_config.parent.mkdir(parents=True)
        global_config.write_text('[filter]\non_error = "explode"\n')
        result = runner.invoke(app, ["config", "reset", "--force"])
        assert result.exit_code == 0
        assert not global_config.exists()
