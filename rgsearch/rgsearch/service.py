"""Call handling: request -> command -> process -> normalized response.

SearchService is the one place failures become responses. Validation and
execution errors turn into error responses; an empty search turns into a
placeholder. Unknown operation names are not ours to answer and propagate
as UnknownOperationError for the transport to handle.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from rgkit.primitives.errors import (
    ExecutionError,
    UnknownOperationError,
    ValidationError,
)
from rgkit.primitives.shell import CommandSpec
from rgkit.primitives.subprocess import Outcome, ProcessExecutor
from rgsearch.builder import CommandBuilder
from rgsearch.config import Settings
from rgsearch.constants import Operation, Placeholder
from rgsearch.models import parse_request
from rgsearch.normalize import normalize_output, strip_ansi

logger = logging.getLogger(__name__)


@dataclass
class ToolResponse:
    """Outbound response: text content plus error flag."""

    text: str
    is_error: bool = False

    def to_content(self) -> List[Dict[str, str]]:
        return [{"type": "text", "text": self.text}]

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.to_content(), "isError": self.is_error}


class SearchService:
    """Runs ripgrep operations.

    Holds no per-call state; one instance serves concurrent calls.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        executor: Optional[ProcessExecutor] = None,
        builder: Optional[CommandBuilder] = None,
    ):
        self.settings = settings or Settings()
        self.executor = executor or ProcessExecutor(timeout=self.settings.timeout)
        self.builder = builder or CommandBuilder(program=self.settings.rg_path)

    @staticmethod
    def supports(operation: str) -> bool:
        return operation in Operation.ALL

    def command_for(
        self, operation: str, arguments: Optional[Dict[str, Any]] = None
    ) -> CommandSpec:
        """Build the CommandSpec for a call without running it."""
        return self.builder.build(parse_request(operation, arguments))

    async def handle(
        self, operation: str, arguments: Optional[Dict[str, Any]] = None
    ) -> ToolResponse:
        """Handle one call.

        Unknown operations propagate; every other failure comes back as
        an error response.

        Raises:
            UnknownOperationError: operation is not supported.
        """
        try:
            request = parse_request(operation, arguments)
            spec = self.builder.build(request)

            logger.info(f"Executing: {spec.render()}")
            result = await self.executor.execute(spec)

            if result.stderr.strip():
                logger.warning(f"ripgrep stderr: {result.stderr.strip()}")

            placeholder = Placeholder.BY_OPERATION[operation]
            if result.outcome is Outcome.NO_MATCHES:
                return ToolResponse(placeholder)

            return ToolResponse(
                normalize_output(result.stdout, request.use_colors, placeholder)
            )

        except ValidationError as e:
            logger.info(f"Rejected {operation} call: {e}")
            return ToolResponse(f"Error: {_validation_text(e)}", is_error=True)

        except ExecutionError as e:
            logger.error(f"{operation} failed: {e.message}")
            stderr = strip_ansi(e.stderr)
            return ToolResponse(f"Error: {e.message}\n{stderr}", is_error=True)

        except UnknownOperationError:
            raise

        except Exception as e:
            logger.exception(f"{operation} failed unexpectedly")
            return ToolResponse(f"Error: {e}", is_error=True)


def _validation_text(error: ValidationError) -> str:
    if error.field == "pattern" and error.error == "Pattern is required":
        return error.error
    return str(error)
