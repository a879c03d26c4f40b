"""rgsearch call <operation> [--params JSON] [--dry-run] [--json]"""

import asyncio

from rgkit.primitives.errors import UnknownOperationError, ValidationError
from rgsearch.constants import Operation
from rgsearch_cli.output import emit_response, parse_params, report_error


def register(subparsers):
    p = subparsers.add_parser("call", help="Run one ripgrep operation")
    p.add_argument("operation", choices=Operation.ALL, help="Operation to run")
    p.add_argument("--params", default="{}",
                   help='Operation arguments as a JSON object (e.g. \'{"pattern": "TODO"}\')')
    p.add_argument("--dry-run", action="store_true",
                   help="Print the ripgrep command instead of running it")
    p.add_argument("--json", action="store_true",
                   help="Print the full response as JSON")
    p.set_defaults(handler=handle)


def handle(args, settings) -> int:
    from rgsearch.service import SearchService

    service = SearchService(settings)
    try:
        params = parse_params(args.params)
        if args.dry_run:
            print(service.command_for(args.operation, params).render())
            return 0
    except (ValidationError, UnknownOperationError) as e:
        return report_error(e)

    response = asyncio.run(service.handle(args.operation, params))
    return emit_response(response, as_json=args.json)
