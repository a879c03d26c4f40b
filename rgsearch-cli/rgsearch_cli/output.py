"""Terminal rendering for rgsearch verbs.

Verbs return exit codes rather than exiting: 0 for a good response, 1 for
an error response or a rejected invocation.
"""

import json
import sys
from typing import Any, Dict

from rgkit.primitives.errors import ToolExecutionError, ValidationError
from rgsearch.service import ToolResponse


def emit_json(data: Any, compact: bool = False) -> None:
    print(json.dumps(data, indent=None if compact else 2, ensure_ascii=False))


def emit_response(response: ToolResponse, as_json: bool = False) -> int:
    """Print a ToolResponse and return its exit code.

    Plain mode prints the text as ripgrep would, without the trailing
    newline doubling up; JSON mode prints the MCP-shaped result.
    """
    if as_json:
        emit_json(response.to_dict())
    else:
        print(response.text.rstrip("\n"))
    return 1 if response.is_error else 0


def report_error(error: Exception) -> int:
    message = error.message if isinstance(error, ToolExecutionError) else str(error)
    print(f"error: {message}", file=sys.stderr)
    return 1


def parse_params(raw: str) -> Dict[str, Any]:
    """Decode the --params JSON object.

    Raises:
        ValidationError: raw is not JSON, or not a JSON object.
    """
    try:
        params = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError("params", f"invalid JSON: {e}", raw) from e
    if not isinstance(params, dict):
        raise ValidationError("params", "must be a JSON object", params)
    return params
