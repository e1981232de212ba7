"""Unit tests for the CLI — Typer command registration and basic behavior."""

from __future__ import annotations

import stat
import sys

import pytest
from typer.testing import CliRunner

from gostress import __version__
from gostress.cli.app import app

runner = CliRunner()

_EVENTS = (
    '{"Time":"2026-10-18T12:00:00Z","Action":"run","Package":"pkg","Test":"TestA"}\n'
    '{"Time":"2026-10-18T12:00:00.5Z","Action":"output","Package":"pkg","Test":"TestA","Output":"boom\\n"}\n'
    '{"Time":"2026-10-18T12:00:01Z","Action":"fail","Package":"pkg","Test":"TestA"}\n'
)


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "run" in result.output
        assert "replay" in result.output

    def test_run_command_exists(self):
        result = runner.invoke(app, ["run", "--help"])
        assert result.exit_code == 0
        assert "--count" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# Test: replay
# ---------------------------------------------------------------------------


class TestReplay:
    def test_replay_file(self, tmp_path):
        log = tmp_path / "events.jsonl"
        log.write_text(_EVENTS, encoding="utf-8")
        result = runner.invoke(app, ["replay", str(log)])
        assert result.exit_code == 0
        assert "\rpkg.TestA: 0/1 1s\n" in result.output
        assert result.output.endswith("boom\n")

    def test_replay_stdin(self):
        result = runner.invoke(app, ["replay", "-"], input=_EVENTS)
        assert result.exit_code == 0
        assert "pkg.TestA: 0/1 1s" in result.output

    def test_replay_summary(self, tmp_path):
        log = tmp_path / "events.jsonl"
        log.write_text(_EVENTS, encoding="utf-8")
        result = runner.invoke(app, ["replay", "--summary", str(log)])
        assert result.exit_code == 0
        assert "Stress summary" in result.output

    def test_replay_missing_file(self, tmp_path):
        result = runner.invoke(app, ["replay", str(tmp_path / "missing.jsonl")])
        assert result.exit_code == 1


# ---------------------------------------------------------------------------
# Test: run
# ---------------------------------------------------------------------------


@pytest.mark.skipif(sys.platform == "win32", reason="uses a shell script")
class TestRun:
    def _go(self, tmp_path, body: str):
        script = tmp_path / "go"
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR)
        return script

    def test_run_passes_extra_args_to_go_test(self, tmp_path):
        argv_file = tmp_path / "argv.txt"
        go = self._go(tmp_path, f'echo "$@" > "{argv_file}"')
        result = runner.invoke(
            app,
            ["run", "--go", str(go), "--count", "5", "./pkg", "-run", "TestFlaky"],
        )
        assert result.exit_code == 0, result.output
        assert argv_file.read_text().split() == [
            "test", "-count=5", "-failfast", "-json", "./pkg", "-run", "TestFlaky",
        ]

    def test_run_propagates_exit_code(self, tmp_path):
        events = tmp_path / "events.jsonl"
        events.write_text(_EVENTS, encoding="utf-8")
        go = self._go(tmp_path, f'cat "{events}"; exit 1')
        result = runner.invoke(app, ["run", "--go", str(go), "--no-failfast", "./pkg"])
        assert result.exit_code == 1
        assert "pkg.TestA: 0/1 1s" in result.output
        assert "boom" in result.output

    def test_run_missing_go(self, tmp_path):
        result = runner.invoke(app, ["run", "--go", str(tmp_path / "nope"), "./pkg"])
        assert result.exit_code == 127
