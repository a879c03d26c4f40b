"""MCP stdio transport for rgsearch."""
