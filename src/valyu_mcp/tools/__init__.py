"""
MCP tool definitions for the Valyu API.

The registry is static: tools are declared once at import and exposed to
the host in declaration order.
"""

from .registry import (
    FEEDBACK_SCHEMA,
    FEEDBACK_TOOL,
    KNOWLEDGE_SCHEMA,
    KNOWLEDGE_TOOL,
    TOOL_REGISTRY,
    ToolDescriptor,
    ToolRegistry,
)

__all__ = [
    "FEEDBACK_SCHEMA",
    "FEEDBACK_TOOL",
    "KNOWLEDGE_SCHEMA",
    "KNOWLEDGE_TOOL",
    "TOOL_REGISTRY",
    "ToolDescriptor",
    "ToolRegistry",
]
