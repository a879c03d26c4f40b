"""rgsearch tools"""

from rgsearch.constants import Operation
from rgsearch.tool_descriptions import TOOL_DESCRIPTIONS, TOOL_SCHEMAS
from rgsearch_cli.output import emit_json


def register(subparsers):
    p = subparsers.add_parser("tools", help="List the available tools and their schemas")
    p.add_argument("--compact", action="store_true", help="Single-line JSON")
    p.set_defaults(handler=handle)


def handle(args, settings) -> int:
    emit_json(
        [
            {
                "name": operation,
                "description": TOOL_DESCRIPTIONS[operation],
                "inputSchema": TOOL_SCHEMAS[operation],
            }
            for operation in Operation.ALL
        ],
        compact=args.compact,
    )
    return 0
