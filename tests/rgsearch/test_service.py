"""Tests for SearchService call handling."""

from typing import List, Optional

import pytest

from rgkit.primitives.errors import ExecutionError, UnknownOperationError
from rgkit.primitives.shell import CommandSpec
from rgkit.primitives.subprocess import (
    ExecutionResult,
    Outcome,
    ProcessExecutor,
    classify,
)
from rgsearch.config import Settings
from rgsearch.constants import Operation
from rgsearch.service import SearchService, ToolResponse

COLORED = "\x1b[35ma.py\x1b[0m:\x1b[32m1\x1b[0m:\x1b[1m\x1b[31mfoo\x1b[0m\n"


class RecordingExecutor:
    """Stands in for ProcessExecutor; records every spec it is given."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        return_code: int = 0,
        error: Optional[ExecutionError] = None,
    ):
        self.stdout = stdout
        self.stderr = stderr
        self.return_code = return_code
        self.error = error
        self.calls: List[CommandSpec] = []

    async def execute(self, spec: CommandSpec) -> ExecutionResult:
        self.calls.append(spec)
        if self.error is not None:
            raise self.error
        outcome = classify(self.return_code, self.stderr)
        if outcome is Outcome.FAILED:
            raise ExecutionError(
                f"Command failed with exit code {self.return_code}: {spec.render()}",
                command=list(spec.tokens),
                return_code=self.return_code,
                stdout=self.stdout,
                stderr=self.stderr,
            )
        return ExecutionResult(
            stdout=self.stdout,
            stderr=self.stderr,
            return_code=self.return_code,
            duration_ms=1.0,
            outcome=outcome,
        )


def make_service(**kwargs) -> SearchService:
    return SearchService(Settings(), executor=RecordingExecutor(**kwargs))


class TestToolResponse:
    def test_to_content(self):
        response = ToolResponse("hi")
        assert response.to_content() == [{"type": "text", "text": "hi"}]
        assert response.to_dict() == {
            "content": [{"type": "text", "text": "hi"}],
            "isError": False,
        }


class TestSupports:
    def test_supported(self):
        for operation in Operation.ALL:
            assert SearchService.supports(operation)

    def test_unsupported(self):
        assert not SearchService.supports("grep")


@pytest.mark.asyncio
class TestValidation:
    """Validation failures never reach the executor."""

    async def test_empty_pattern_not_executed(self):
        service = make_service(stdout="should not appear")
        response = await service.handle(Operation.SEARCH, {"pattern": ""})
        assert response.is_error is True
        assert response.text == "Error: Pattern is required"
        assert service.executor.calls == []

    async def test_missing_pattern_count(self):
        service = make_service()
        response = await service.handle(Operation.COUNT_MATCHES, {})
        assert response.is_error is True
        assert service.executor.calls == []

    async def test_bad_parameter_type(self):
        service = make_service()
        response = await service.handle(
            Operation.SEARCH, {"pattern": "x", "maxResults": "lots"}
        )
        assert response.is_error is True
        assert "maxResults" in response.text
        assert service.executor.calls == []

    async def test_unknown_operation_raises(self):
        service = make_service()
        with pytest.raises(UnknownOperationError):
            await service.handle("grep", {"pattern": "x"})
        assert service.executor.calls == []


@pytest.mark.asyncio
class TestResponses:
    async def test_success_stripped_by_default(self):
        service = make_service(stdout=COLORED)
        response = await service.handle(Operation.SEARCH, {"pattern": "foo"})
        assert response.is_error is False
        assert response.text == "a.py:1:foo\n"

    async def test_success_colors_kept_when_requested(self):
        service = make_service(stdout=COLORED)
        response = await service.handle(
            Operation.SEARCH, {"pattern": "foo", "useColors": True}
        )
        assert response.text == COLORED
        assert service.executor.calls[0].args[-5:-3] == ("--color", "always")

    async def test_no_matches_is_not_error(self):
        service = make_service(return_code=1)
        response = await service.handle(Operation.SEARCH, {"pattern": "zzz"})
        assert response.is_error is False
        assert response.text == "No matches found."

    async def test_no_files_placeholder(self):
        service = make_service(return_code=1)
        response = await service.handle(Operation.LIST_FILES, {"fileType": "py"})
        assert response.text == "No files found."

    async def test_empty_file_types_placeholder(self):
        service = make_service(stdout="")
        response = await service.handle(Operation.LIST_FILE_TYPES, {})
        assert response.text == "Failed to get file types."

    async def test_list_files_always_stripped(self):
        service = make_service(stdout="\x1b[35ma.py\x1b[0m\n")
        response = await service.handle(Operation.LIST_FILES, {})
        assert response.text == "a.py\n"

    async def test_exit_two_is_error_with_stderr(self):
        service = make_service(return_code=2, stderr="regex parse error:\n    (\n")
        response = await service.handle(Operation.SEARCH, {"pattern": "("})
        assert response.is_error is True
        assert response.text.startswith("Error: Command failed with exit code 2")
        assert "regex parse error" in response.text

    async def test_launch_failure_is_error(self):
        error = ExecutionError("rg not found on PATH", command=["rg"])
        service = make_service(error=error)
        response = await service.handle(Operation.LIST_FILE_TYPES, {})
        assert response.is_error is True
        assert response.text == "Error: rg not found on PATH\n"

    async def test_success_with_stderr_still_succeeds(self):
        service = make_service(stdout="a.py:1:x\n", stderr="skipped binary file")
        response = await service.handle(Operation.SEARCH, {"pattern": "x"})
        assert response.is_error is False
        assert response.text == "a.py:1:x\n"

    async def test_count_lines_default_flag(self):
        service = make_service(stdout="a.py:3\n")
        await service.handle(Operation.COUNT_MATCHES, {"pattern": "x"})
        assert "-c" in service.executor.calls[0].args
        assert "--count-matches" not in service.executor.calls[0].args

    async def test_one_command_per_call(self):
        service = make_service(stdout="x\n")
        await service.handle(Operation.SEARCH, {"pattern": "x"})
        await service.handle(Operation.LIST_FILES, {})
        assert len(service.executor.calls) == 2


class TestCommandFor:
    def test_uses_configured_program(self):
        service = SearchService(Settings(rg_path="/opt/rg"))
        spec = service.command_for(Operation.SEARCH, {"pattern": "x", "path": "src"})
        assert spec.tokens == (
            "/opt/rg", "-n", "--color", "never", "--", "x", "src",
        )

    def test_executor_gets_timeout(self):
        service = SearchService(Settings(timeout=3.0))
        assert service.executor.timeout == 3.0


class ExplodingExecutor:
    """Executor that fails with something other than ExecutionError."""

    async def execute(self, spec: CommandSpec) -> ExecutionResult:
        raise RuntimeError("executor broke")


@pytest.mark.asyncio
class TestRealExecutorBadInput:
    """Malformed input through a real ProcessExecutor still yields a response."""

    @pytest.mark.parametrize(
        "operation,arguments",
        [
            (Operation.SEARCH, {"pattern": "a\x00b"}),
            (Operation.ADVANCED_SEARCH, {"pattern": "x", "filePattern": "\x00"}),
            (Operation.COUNT_MATCHES, {"pattern": "\ud800"}),
            (Operation.LIST_FILES, {"path": "\ud800"}),
            (Operation.LIST_FILES, {"path": "src\x00evil"}),
            (Operation.SEARCH, {"pattern": ["not", "a", "string"]}),
            (Operation.ADVANCED_SEARCH, {"pattern": "x", "context": float("nan")}),
        ],
    )
    async def test_bad_arguments_return_error(self, operation, arguments):
        service = SearchService(Settings())
        assert isinstance(service.executor, ProcessExecutor)
        response = await service.handle(operation, arguments)
        assert response.is_error is True
        assert response.text.startswith("Error: ")

    async def test_unlaunchable_program_returns_error(self):
        service = SearchService(Settings(rg_path="r\x00g"))
        response = await service.handle(Operation.SEARCH, {"pattern": "x"})
        assert response.is_error is True
        assert "Invalid argument" in response.text

    async def test_unexpected_executor_failure_returns_error(self):
        service = SearchService(Settings(), executor=ExplodingExecutor())
        response = await service.handle(Operation.LIST_FILE_TYPES, {})
        assert response.is_error is True
        assert response.text == "Error: executor broke"
