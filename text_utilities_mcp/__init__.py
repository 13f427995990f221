"""Text utilities MCP server: six text tools over stdio or HTTP/SSE JSON-RPC."""

SERVER_NAME = "text-utilities-mcp"
__version__ = "1.0.0"
