"""MCP server for ripgrep search.

Exposes 5 tools:
- search
- advanced-search
- count-matches
- list-files
- list-file-types
"""

import asyncio
import logging
import sys
from typing import Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.models import InitializationOptions
from mcp.server.lowlevel import NotificationOptions
from mcp.types import Tool, TextContent

from rgkit.primitives.errors import UnknownOperationError
from rgsearch import __version__
from rgsearch.config import Settings, load_settings
from rgsearch.constants import SERVER_NAME, Operation
from rgsearch.logger import configure_logging
from rgsearch.service import SearchService
from rgsearch.tool_descriptions import TOOL_DESCRIPTIONS, TOOL_SCHEMAS


logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Error response for a tool call.

    The MCP layer converts exceptions raised from call_tool into results
    with isError set and the message as text content.
    """


def build_tools() -> list[Tool]:
    return [
        Tool(
            name=operation,
            description=TOOL_DESCRIPTIONS[operation],
            inputSchema=TOOL_SCHEMAS[operation],
        )
        for operation in Operation.ALL
    ]


class RipgrepServer:
    """MCP Server wrapping ripgrep."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        service: Optional[SearchService] = None,
    ):
        """Initialize server around an explicit service context."""
        self.settings = settings or Settings()
        self.service = service or SearchService(self.settings)
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self):
        """Register MCP handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return the 5 ripgrep tools."""
            return build_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Dispatch to the search service."""
            return await self.call_tool(name, arguments)

    async def call_tool(self, name: str, arguments: Optional[dict]) -> list[TextContent]:
        try:
            response = await self.service.handle(name, arguments or {})
        except UnknownOperationError as e:
            logger.warning(f"Call for unsupported tool: {name}")
            raise ToolCallError(str(e)) from e

        if response.is_error:
            raise ToolCallError(response.text)
        return [TextContent(type="text", text=response.text)]

    async def start(self):
        """Start the MCP server."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Ripgrep MCP Server running")
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


async def run_stdio(settings: Optional[Settings] = None):
    """Run in stdio mode."""
    server = RipgrepServer(settings)
    await server.start()


def main(settings: Optional[Settings] = None) -> int:
    """Entry point."""
    try:
        settings = settings or load_settings()
        configure_logging(settings)
        asyncio.run(run_stdio(settings))
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception("Fatal error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
