"""rgsearch serve"""


def register(subparsers):
    p = subparsers.add_parser("serve", help="Run the MCP server over stdio")
    p.set_defaults(handler=handle)


def handle(args, settings) -> int:
    from rgsearch_mcp.server import main

    return main(settings)
