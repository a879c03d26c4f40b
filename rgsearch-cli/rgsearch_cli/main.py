"""rgsearch entry point.

Verbs:
- serve: run the MCP stdio server
- call: run one operation directly, no MCP transport
- tools: print tool names, descriptions, and input schemas
"""

import argparse
import sys

from rgkit.primitives.errors import ConfigurationError
from rgsearch_cli.output import report_error
from rgsearch_cli.verbs import call, serve, tools


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rgsearch",
        description="ripgrep search operations for automated clients",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML settings file (default: $RGSEARCH_CONFIG)",
    )
    parser.add_argument(
        "--rg",
        dest="rg_path",
        default=None,
        help="ripgrep executable (default: rg on PATH)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each ripgrep run (default: no limit)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="verb", required=True)

    serve.register(sub)
    call.register(sub)
    tools.register(sub)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from rgsearch.config import load_settings
    from rgsearch.logger import configure_logging

    overrides = {
        "rg_path": args.rg_path,
        "timeout": args.timeout,
        "debug": True if args.debug else None,
    }
    try:
        settings = load_settings(args.config, overrides=overrides)
    except ConfigurationError as e:
        return report_error(e)

    configure_logging(settings)

    # Dispatch to verb handler
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
