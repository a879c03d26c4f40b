"""Error types for rgkit primitives.

Primitives return result objects for expected outcomes (a search that
matched, a search that found nothing). These errors are for the rest:
- ValidationError: a request parameter is missing or malformed
- ExecutionError: the search tool could not run or failed
- ConfigurationError: a settings value is unusable
- UnknownOperationError: the operation name is not one we serve
"""

from typing import Any, List, Optional, Sequence


class ValidationError(Exception):
    """Validation error with field, error message, and value.

    Attributes:
        field: The parameter name that failed validation.
        error: Description of the validation error.
        value: The value that failed validation.
    """

    def __init__(self, field: str, error: str, value: Any = None):
        super().__init__(f"{field}: {error}")
        self.field = field
        self.error = error
        self.value = value

    @property
    def message(self) -> str:
        return self.error


class ToolExecutionError(Exception):
    """Base exception for tool execution failures.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ExecutionError(ToolExecutionError):
    """The external tool exited unexpectedly or could not be launched.

    Attributes:
        command: Token list that was run.
        return_code: Exit status, or None if the process never started.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        return_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.command: List[str] = list(command or [])
        self.return_code = return_code
        self.stdout = stdout
        self.stderr = stderr


class ConfigurationError(ToolExecutionError):
    """Configuration error (missing field, invalid value, etc).

    Attributes:
        message: Description of the error.
        field: Optional field name that failed.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UnknownOperationError(Exception):
    """Operation name is outside the supported set."""

    def __init__(self, operation: str):
        super().__init__(f"Unknown tool: {operation}")
        self.operation = operation
