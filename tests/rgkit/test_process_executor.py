"""Tests for the process executor."""

import asyncio
import sys

import pytest
from rgkit.primitives.errors import ExecutionError
from rgkit.primitives.shell import CommandSpec
from rgkit.primitives.subprocess import (
    ExecutionResult,
    Outcome,
    ProcessExecutor,
    classify,
)


def python(code: str) -> CommandSpec:
    """CommandSpec running a Python snippet in a child interpreter."""
    return CommandSpec(program=sys.executable, args=("-c", code))


class TestClassify:
    """Exit status -> Outcome."""

    def test_zero_is_matched(self):
        assert classify(0, "") is Outcome.MATCHED

    def test_zero_with_stderr_is_matched(self):
        assert classify(0, "warning: skipped binary file") is Outcome.MATCHED

    def test_one_without_stderr_is_no_matches(self):
        assert classify(1, "") is Outcome.NO_MATCHES
        assert classify(1, "\n") is Outcome.NO_MATCHES

    def test_one_with_stderr_is_failed(self):
        assert classify(1, "error") is Outcome.FAILED

    def test_two_is_failed(self):
        assert classify(2, "") is Outcome.FAILED

    def test_negative_is_failed(self):
        assert classify(-9, "") is Outcome.FAILED


class TestExecutionResult:
    def test_success_property(self):
        result = ExecutionResult("", "", 1, 1.0, Outcome.NO_MATCHES)
        assert result.success is True
        failed = ExecutionResult("", "x", 2, 1.0, Outcome.FAILED)
        assert failed.success is False


@pytest.mark.asyncio
class TestProcessExecutorRun:
    """ProcessExecutor.run spawns and classifies without raising."""

    async def test_captures_stdout(self):
        result = await ProcessExecutor().run(python("print('hello')"))
        assert result.outcome is Outcome.MATCHED
        assert result.stdout.strip() == "hello"
        assert result.stderr == ""
        assert result.return_code == 0
        assert result.duration_ms >= 0

    async def test_streams_kept_separate(self):
        code = "import sys; sys.stdout.write('out'); sys.stderr.write('err')"
        result = await ProcessExecutor().run(python(code))
        assert result.stdout == "out"
        assert result.stderr == "err"

    async def test_large_output_on_both_streams(self):
        code = (
            "import sys\n"
            "for i in range(20000):\n"
            "    sys.stdout.write('o' * 10 + '\\n')\n"
            "    sys.stderr.write('e' * 10 + '\\n')\n"
        )
        result = await ProcessExecutor().run(python(code))
        assert result.stdout.count("\n") == 20000
        assert result.stderr.count("\n") == 20000

    async def test_exit_one_is_no_matches(self):
        result = await ProcessExecutor().run(python("raise SystemExit(1)"))
        assert result.outcome is Outcome.NO_MATCHES
        assert result.return_code == 1

    async def test_exit_two_is_failed(self):
        code = "import sys; sys.stderr.write('regex parse error'); sys.exit(2)"
        result = await ProcessExecutor().run(python(code))
        assert result.outcome is Outcome.FAILED
        assert result.return_code == 2
        assert "regex parse error" in result.stderr

    async def test_arguments_not_shell_interpreted(self):
        code = "import sys; print(sys.argv[1])"
        spec = CommandSpec(sys.executable, ("-c", code, "$(echo hi); `id` | cat"))
        result = await ProcessExecutor().run(spec)
        assert result.stdout.strip() == "$(echo hi); `id` | cat"

    async def test_missing_binary_raises(self):
        spec = CommandSpec("definitely-not-a-real-binary-rgsearch", ("x",))
        with pytest.raises(ExecutionError) as exc_info:
            await ProcessExecutor().run(spec)
        assert exc_info.value.return_code is None
        assert "not found" in exc_info.value.message

    async def test_nul_in_argument_raises(self):
        spec = CommandSpec(sys.executable, ("-c", "pass", "a\x00b"))
        with pytest.raises(ExecutionError) as exc_info:
            await ProcessExecutor().run(spec)
        assert exc_info.value.return_code is None
        assert "Invalid argument" in exc_info.value.message
        assert isinstance(exc_info.value.cause, ValueError)

    async def test_timeout_kills_process(self):
        executor = ProcessExecutor(timeout=0.5)
        with pytest.raises(ExecutionError, match="timed out"):
            await executor.run(python("import time; time.sleep(30)"))

    async def test_cancellation_propagates(self):
        task = asyncio.ensure_future(
            ProcessExecutor().run(python("import time; time.sleep(30)"))
        )
        await asyncio.sleep(0.5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    async def test_concurrent_calls_independent(self):
        executor = ProcessExecutor()
        results = await asyncio.gather(
            *(executor.run(python(f"print({i})")) for i in range(5))
        )
        assert [r.stdout.strip() for r in results] == ["0", "1", "2", "3", "4"]


@pytest.mark.asyncio
class TestProcessExecutorExecute:
    """ProcessExecutor.execute raises only for FAILED outcomes."""

    async def test_success_returns_result(self):
        result = await ProcessExecutor().execute(python("print('x')"))
        assert result.outcome is Outcome.MATCHED

    async def test_no_matches_returns_result(self):
        result = await ProcessExecutor().execute(python("raise SystemExit(1)"))
        assert result.outcome is Outcome.NO_MATCHES
        assert result.stdout == ""

    async def test_failure_raises_with_streams(self):
        code = "import sys; print('partial'); sys.stderr.write('boom'); sys.exit(2)"
        with pytest.raises(ExecutionError) as exc_info:
            await ProcessExecutor().execute(python(code))
        err = exc_info.value
        assert err.return_code == 2
        assert err.stderr == "boom"
        assert "partial" in err.stdout
        assert err.command[0] == sys.executable
        assert "exit code 2" in err.message

    async def test_exit_one_with_stderr_raises(self):
        code = "import sys; sys.stderr.write('oops'); sys.exit(1)"
        with pytest.raises(ExecutionError) as exc_info:
            await ProcessExecutor().execute(python(code))
        assert exc_info.value.return_code == 1
