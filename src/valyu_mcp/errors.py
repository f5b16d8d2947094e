"""
Error taxonomy for the Valyu MCP server.

Only ConfigurationError is fatal (raised at startup, before any request is
served). Every other error is produced per tool invocation and converted by
the dispatcher into an error envelope.
"""

from typing import Any, Dict, Optional


class ValyuMCPError(Exception):
    """Base exception for all Valyu MCP server errors."""

    category = "unknown"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ValyuMCPError):
    """Raised when required configuration is missing or invalid."""

    category = "configuration"


class ValidationError(ValyuMCPError):
    """Raised when tool arguments do not match the tool's request schema."""

    category = "validation"


class UnknownToolError(ValyuMCPError):
    """Raised when an invocation names a tool that is not registered."""

    category = "unknown_tool"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", details={"tool": name})
        self.name = name


class UpstreamError(ValyuMCPError):
    """Raised when the Valyu API answers with a non-success status."""

    category = "upstream"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code


class TransportError(ValyuMCPError):
    """Raised when the Valyu API cannot be reached (DNS, refused, timeout)."""

    category = "transport"
