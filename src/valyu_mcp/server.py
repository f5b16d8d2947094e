"""
FastMCP server initialization and configuration.

Binds the dispatcher to the MCP protocol: each registry descriptor becomes
a FastMCP tool advertising the descriptor's exact input schema. Supports
both stdio and SSE transports.
"""

import asyncio
import logging
import socket
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from .client import ValyuClient
from .config import ServerConfig
from .credentials import APICredential
from .dispatcher import RequestDispatcher
from .tools.registry import ToolDescriptor

logger = logging.getLogger(__name__)


SERVER_NAME = "valyu-mcp-server"


class DispatchedTool(Tool):
    """FastMCP tool whose calls are routed through the RequestDispatcher."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        # requests is blocking; keep the event loop free for other calls
        envelope = await asyncio.to_thread(self.dispatcher.handle_call_tool, self.name, arguments)
        if envelope.is_error:
            # FastMCP reports ToolError as isError=true with the message as text
            raise ToolError(envelope.text)
        return ToolResult(
            content=[TextContent(type="text", text=item.text) for item in envelope.content]
        )


@dataclass
class MCPServer:
    """
    Valyu MCP server instance.

    Attributes:
        dispatcher: Routes tool calls to the Valyu API client
        host: Server bind address (SSE only)
        port: Server port (SSE only)
        transport: Transport mode ("stdio" or "sse")
    """

    dispatcher: RequestDispatcher
    host: str = "127.0.0.1"
    port: int = 8000
    transport: Literal["stdio", "sse"] = "stdio"
    _app: Optional[FastMCP] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Validate configuration and register tools."""
        if self.transport not in ("stdio", "sse"):
            raise ValueError(
                f"Invalid transport '{self.transport}'. "
                "Must be 'stdio' or 'sse'."
            )

        self._app = FastMCP(SERVER_NAME)
        self._register_tools()

    @classmethod
    def from_config(cls, config: ServerConfig, credential: APICredential) -> "MCPServer":
        """Build client, dispatcher and server from loaded settings."""
        client = ValyuClient(credential, base_url=config.base_url, timeout=config.timeout)
        return cls(
            dispatcher=RequestDispatcher(client),
            host=config.host,
            port=config.port,
            transport=config.transport,
        )

    @property
    def app(self) -> FastMCP:
        return self._app

    def _check_port_available(self, host: str, port: int) -> bool:
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
                return True
        except OSError:
            return False

    def _register_tools(self):
        for descriptor in self.dispatcher.handle_list_tools():
            self.register_tool(descriptor)

    def register_tool(self, descriptor: ToolDescriptor):
        """
        Register a registry descriptor as an MCP tool.

        Args:
            descriptor: Tool name, description and input schema
        """
        if not self._app:
            raise RuntimeError("FastMCP app not initialized")

        self._app.add_tool(
            DispatchedTool(
                name=descriptor.name,
                description=descriptor.description,
                parameters=descriptor.to_dict()["inputSchema"],
                dispatcher=self.dispatcher,
            )
        )
        logger.debug("Registered tool %s", descriptor.name)

    def start(self):
        """
        Start the MCP server with configured transport.

        The upstream HTTP session is closed when the server stops.

        Raises:
            RuntimeError: If port unavailable (SSE) or FastMCP fails to start
        """
        if not self._app:
            raise RuntimeError("FastMCP app not initialized. This should not happen.")

        try:
            if self.transport == "stdio":
                # stdout carries JSON-RPC frames; nothing else may write to it
                try:
                    self._app.run()
                except Exception as e:
                    raise RuntimeError(f"Failed to start MCP server with stdio transport: {e}") from e

            elif self.transport == "sse":
                if not self._check_port_available(self.host, self.port):
                    raise RuntimeError(
                        f"Port {self.port} already in use. "
                        f"Choose a different port or stop the conflicting service."
                    )

                try:
                    self._app.run(transport="sse", host=self.host, port=self.port)
                except Exception as e:
                    raise RuntimeError(
                        f"Failed to start MCP server on {self.host}:{self.port}: {e}"
                    ) from e
        finally:
            self.dispatcher.client.close()
