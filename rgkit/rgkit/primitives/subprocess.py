"""Subprocess execution primitive.

Runs one CommandSpec as a child process with stdout and stderr captured on
separate pipes, and classifies the exit status. Exit status 1 with nothing
on stderr is ripgrep's "searched fine, found nothing" and is reported as an
outcome, not an error.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rgkit.primitives.errors import ExecutionError
from rgkit.primitives.shell import CommandSpec

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """How a finished process should be read."""

    MATCHED = "matched"
    NO_MATCHES = "no_matches"
    FAILED = "failed"


@dataclass
class ExecutionResult:
    """Result of subprocess execution.

    Attributes:
        stdout: Standard output from process.
        stderr: Standard error from process.
        return_code: Exit code from process.
        duration_ms: Time taken for execution in milliseconds.
        outcome: Classification of the exit status.
    """

    stdout: str
    stderr: str
    return_code: int
    duration_ms: float
    outcome: Outcome

    @property
    def success(self) -> bool:
        return self.outcome is not Outcome.FAILED


def classify(return_code: int, stderr: str) -> Outcome:
    """Map an exit status (and stderr) to an Outcome."""
    if return_code == 0:
        return Outcome.MATCHED
    if return_code == 1 and not stderr.strip():
        return Outcome.NO_MATCHES
    return Outcome.FAILED


def _decode(data: Optional[bytes]) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


class ProcessExecutor:
    """Spawn one child per call; no shell, no shared state."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    async def run(self, spec: CommandSpec) -> ExecutionResult:
        """Run spec to completion and classify it.

        Raises:
            ExecutionError: The process could not be launched, or the
                timeout expired.
        """
        tokens = list(spec.tokens)
        start_time = time.time()

        try:
            proc = await asyncio.create_subprocess_exec(
                *tokens,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ExecutionError(
                f"{spec.program} not found on PATH",
                command=tokens,
                cause=e,
            ) from e
        except PermissionError as e:
            raise ExecutionError(
                f"Permission denied running {spec.program}",
                command=tokens,
                cause=e,
            ) from e
        except OSError as e:
            raise ExecutionError(
                f"Failed to launch {spec.program}: {e}",
                command=tokens,
                cause=e,
            ) from e
        except ValueError as e:
            # NUL bytes or unencodable text in an argument
            raise ExecutionError(
                f"Invalid argument for {spec.program}: {e}",
                command=tokens,
                cause=e,
            ) from e

        try:
            if self.timeout:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    proc.communicate(), timeout=self.timeout
                )
            else:
                stdout_bytes, stderr_bytes = await proc.communicate()
        except asyncio.TimeoutError as e:
            await self._reap(proc)
            raise ExecutionError(
                f"{spec.program} timed out after {self.timeout} seconds",
                command=tokens,
                cause=e,
            ) from e
        except asyncio.CancelledError:
            await self._reap(proc)
            raise

        stdout = _decode(stdout_bytes)
        stderr = _decode(stderr_bytes)
        return_code = proc.returncode if proc.returncode is not None else -1
        duration_ms = (time.time() - start_time) * 1000

        logger.debug(
            f"{spec.program} exited {return_code} in {duration_ms:.1f}ms"
        )

        return ExecutionResult(
            stdout=stdout,
            stderr=stderr,
            return_code=return_code,
            duration_ms=duration_ms,
            outcome=classify(return_code, stderr),
        )

    async def execute(self, spec: CommandSpec) -> ExecutionResult:
        """Run spec and raise for a FAILED outcome.

        Returns:
            ExecutionResult whose outcome is MATCHED or NO_MATCHES.

        Raises:
            ExecutionError: Launch failure, timeout, or unexpected exit.
        """
        result = await self.run(spec)
        if result.outcome is Outcome.FAILED:
            raise ExecutionError(
                f"Command failed with exit code {result.return_code}: {spec.render()}",
                command=list(spec.tokens),
                return_code=result.return_code,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return result

    @staticmethod
    async def _reap(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()
