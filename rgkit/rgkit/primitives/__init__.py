"""rgkit primitives: stateless execution units."""

from rgkit.primitives.errors import (
    ConfigurationError,
    ExecutionError,
    ToolExecutionError,
    UnknownOperationError,
    ValidationError,
)
from rgkit.primitives.shell import CommandSpec, quote_arg, render_command
from rgkit.primitives.subprocess import (
    ExecutionResult,
    Outcome,
    ProcessExecutor,
    classify,
)

__all__ = [
    # Errors
    "ValidationError",
    "ToolExecutionError",
    "ExecutionError",
    "ConfigurationError",
    "UnknownOperationError",
    # Shell
    "CommandSpec",
    "quote_arg",
    "render_command",
    # Subprocess
    "Outcome",
    "ExecutionResult",
    "ProcessExecutor",
    "classify",
]
