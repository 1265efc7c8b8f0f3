"""Tests for command execution and output change detection."""

import sys

import pytest

from cmdwatch.config.schema import CommandSpec
from cmdwatch.fingerprint import checksum
from cmdwatch.terminal.result import CommandResult, Outcome
from cmdwatch.terminal.runner import CommandRunner

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX sh")


def sh(script: str, timeout: float = 10.0) -> CommandRunner:
    return CommandRunner(CommandSpec("sh", ("-c", script), timeout=timeout))


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success_property(self):
        assert CommandResult(outcome=Outcome.CLEAN, exit_code=0).success is True

    def test_failure_property(self):
        assert CommandResult(outcome=Outcome.EXIT, exit_code=1).success is False

    def test_repr_exit(self):
        assert "exit=3" in repr(CommandResult(outcome=Outcome.EXIT, exit_code=3))

    def test_repr_timeout(self):
        assert "timeout" in repr(CommandResult(outcome=Outcome.TIMEOUT))


class TestCommandRunner:
    """Tests for CommandRunner."""

    @pytest.mark.asyncio
    async def test_echo_basic(self):
        runner = CommandRunner(CommandSpec("echo", ("hello",)))
        result = await runner.run()
        assert result.outcome is Outcome.CLEAN
        assert result.exit_code == 0
        assert runner.buffer == b"hello\n"
        assert runner.output() == "hello"
        assert runner.result is result

    @pytest.mark.asyncio
    async def test_captures_stdout_and_stderr(self):
        runner = sh("echo out; echo err >&2")
        await runner.run()
        assert b"out\n" in runner.buffer
        assert b"err\n" in runner.buffer

    @pytest.mark.asyncio
    async def test_non_zero_exit(self):
        runner = sh("echo failing; exit 3")
        result = await runner.run()
        assert result.outcome is Outcome.EXIT
        assert result.exit_code == 3
        assert runner.output() == "failing"

    @pytest.mark.asyncio
    async def test_timeout(self):
        runner = CommandRunner(CommandSpec("sleep", ("10",), timeout=0.2))
        result = await runner.run()
        assert result.outcome is Outcome.TIMEOUT
        assert result.exit_code is None
        assert result.duration_ms < 5000

    @pytest.mark.asyncio
    async def test_timeout_wins_over_exit_status(self):
        runner = sh("sleep 10; exit 3", timeout=0.2)
        result = await runner.run()
        assert result.outcome is Outcome.TIMEOUT

    @pytest.mark.asyncio
    async def test_command_not_found(self):
        runner = CommandRunner(CommandSpec("nonexistent_command_xyz"))
        result = await runner.run()
        assert result.outcome is Outcome.ERROR
        assert isinstance(result.error, FileNotFoundError)
        assert runner.buffer == b""

    @pytest.mark.asyncio
    async def test_permission_denied(self, tmp_path):
        script = tmp_path / "script.sh"
        script.write_text("#!/bin/sh\necho hi\n")
        script.chmod(0o644)
        runner = CommandRunner(CommandSpec(str(script)))
        result = await runner.run()
        assert result.outcome is Outcome.ERROR
        assert isinstance(result.error, PermissionError)

    @pytest.mark.asyncio
    async def test_output_is_stripped_only_for_output(self):
        runner = sh("printf '  \\n'")
        await runner.run()
        assert runner.output() == ""
        assert runner.buffer == b"  \n"


class TestChangeDetection:
    """Tests for CommandRunner.has_changed()."""

    @pytest.mark.asyncio
    async def test_first_run_with_output_changed(self):
        runner = CommandRunner(CommandSpec("echo", ("A",)))
        await runner.run()
        assert runner.has_changed() is True

    @pytest.mark.asyncio
    async def test_first_run_without_output_unchanged(self):
        runner = CommandRunner(CommandSpec("true"))
        await runner.run()
        assert runner.buffer == b""
        assert runner.has_changed() is False

    @pytest.mark.asyncio
    async def test_same_output_twice_unchanged(self):
        runner = CommandRunner(CommandSpec("echo", ("A",)))
        await runner.run()
        await runner.run()
        assert runner.has_changed() is False

    @pytest.mark.asyncio
    async def test_different_output_changed(self, tmp_path):
        counter = tmp_path / "count"
        counter.write_text("0")
        runner = sh(f"n=$(cat {counter}); echo $n; echo $((n + 1)) > {counter}")
        await runner.run()
        assert runner.output() == "0"
        await runner.run()
        assert runner.output() == "1"
        assert runner.has_changed() is True

    @pytest.mark.asyncio
    async def test_whitespace_only_difference_is_a_change(self, tmp_path):
        flag = tmp_path / "flag"
        runner = sh(f"if [ -e {flag} ]; then echo 'A '; else echo A; fi")
        await runner.run()
        flag.touch()
        await runner.run()
        assert runner.has_changed() is True

    @pytest.mark.asyncio
    async def test_compares_consecutive_runs(self):
        runner = CommandRunner(CommandSpec("echo", ("A",)))
        await runner.run()
        first = checksum(runner.buffer)
        await runner.run()
        assert checksum(runner.buffer) == first
        assert runner.has_changed() is False
