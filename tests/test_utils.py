"""Unit tests for utility functions (nestify.utils).

Tests cover:
- run_command (success, failure, cwd, env vars, timeout, missing directory, echo)
- format_duration
- Rich output helpers (print_success, print_error, print_warning, print_summary_table)
- create_progress
"""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.progress import Progress

from nestify.utils import (
    NOT_FOUND_RETURNCODE,
    TIMEOUT_RETURNCODE,
    CommandResult,
    create_progress,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    async def test_successful_command(self):
        result = await run_command("echo hello")
        assert result == CommandResult(0, "hello", "")

    @pytest.mark.unit
    async def test_failing_command_reports_exit_code(self):
        returncode, _stdout, stderr = await run_command("echo oops >&2; exit 3")
        assert returncode == 3
        assert stderr == "oops"

    @pytest.mark.unit
    async def test_runs_in_cwd(self, tmp_path: Path):
        (tmp_path / "marker.txt").write_text("x", encoding="utf-8")
        result = await run_command("ls", cwd=tmp_path)
        assert result.returncode == 0
        assert "marker.txt" in result.stdout

    @pytest.mark.unit
    async def test_extra_env_is_merged(self):
        result = await run_command("echo $NESTIFY_TEST_VALUE", env={"NESTIFY_TEST_VALUE": "42"})
        assert result.stdout == "42"

    @pytest.mark.unit
    async def test_timeout(self):
        returncode, _stdout, stderr = await run_command("sleep 5", timeout=0.2)
        assert returncode == TIMEOUT_RETURNCODE
        assert "timed out" in stderr

    @pytest.mark.unit
    async def test_missing_working_directory(self, tmp_path: Path):
        result = await run_command("echo hi", cwd=tmp_path / "missing")
        assert result.returncode == NOT_FOUND_RETURNCODE
        assert "Command not found" in result.stderr

    @pytest.mark.unit
    async def test_echo_prints_command(self, capsys):
        await run_command("echo quiet", echo=True)
        assert "$ echo quiet" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_negative_clamps_to_zero(self):
        assert format_duration(-1) == "0.0s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_messages_are_printed(self, capsys):
        print_success("all good")
        print_error("bad thing")
        print_warning("careful")
        out = capsys.readouterr().out
        assert "all good" in out
        assert "bad thing" in out
        assert "careful" in out

    @pytest.mark.unit
    def test_markup_in_messages_is_escaped(self, capsys):
        print_error("missing [bold]brackets[/bold]")
        assert "[bold]brackets[/bold]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_summary_table(self, capsys):
        print_summary_table({"Install dependencies": "succeeded"}, title="Run")
        out = capsys.readouterr().out
        assert "Install dependencies" in out
        assert "succeeded" in out

    @pytest.mark.unit
    def test_create_progress(self):
        assert isinstance(create_progress(), Progress)
