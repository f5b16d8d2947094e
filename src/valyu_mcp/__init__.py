"""
MCP (Model Context Protocol) server for the Valyu API.

Exposes the Valyu knowledge search and feedback endpoints as MCP tools
over stdio (or SSE).

Architecture:
- server.py: FastMCP server initialization and tool binding
- dispatcher.py: Tool call routing and response envelopes
- client.py: Authenticated HTTP client for the Valyu API
- schemas.py: Request models and argument validation
- tools/: Static tool registry
- config.py / credentials.py: Settings and API key loading
"""

__all__ = ["MCPServer", "RequestDispatcher", "ServerConfig", "ValyuClient"]

from .client import ValyuClient
from .config import ServerConfig
from .dispatcher import RequestDispatcher
from .server import MCPServer
