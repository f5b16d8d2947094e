"""
Static registry of the tools exposed to the MCP host.

Descriptors are built once at import and never mutated; declaration order
is the order reported by `tools/list`.
"""

import copy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and JSON input schema of one tool."""

    name: str
    description: str
    input_schema: Mapping[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in MCP `Tool` shape."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(dict(self.input_schema)),
        }


# JSON Schema for knowledge tool parameters
KNOWLEDGE_SCHEMA = {
    "type": "object",
    "properties": {
        "query": {"type": "string"},
        "search_type": {"type": "string", "enum": ["proprietary", "web", "all"]},
        "max_price": {"type": "number"},
        "data_sources": {"type": "array", "items": {"type": "string"}},
        "max_num_results": {"type": "integer", "default": 10},
        "similarity_threshold": {"type": "number", "default": 0.4},
        "query_rewrite": {"type": "boolean", "default": True},
    },
    "required": ["query", "search_type", "max_price"],
}

# JSON Schema for feedback tool parameters
FEEDBACK_SCHEMA = {
    "type": "object",
    "properties": {
        "tx_id": {"type": "string"},
        "feedback": {"type": "string"},
        "sentiment": {"type": "string", "enum": ["very good", "good", "bad", "very bad"]},
    },
    "required": ["tx_id", "feedback", "sentiment"],
}

KNOWLEDGE_TOOL = ToolDescriptor(
    name="knowledge",
    description="Search proprietary and/or web sources for information based on the supplied query.",
    input_schema=MappingProxyType(KNOWLEDGE_SCHEMA),
)

FEEDBACK_TOOL = ToolDescriptor(
    name="feedback",
    description="Submit user feedback and sentiment for a transaction.",
    input_schema=MappingProxyType(FEEDBACK_SCHEMA),
)


class ToolRegistry:
    """Read-only table of tool name -> ToolDescriptor."""

    def __init__(self, descriptors: Iterable[ToolDescriptor]):
        table: Dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in table:
                raise ValueError(f"Duplicate tool name: {descriptor.name}")
            table[descriptor.name] = descriptor
        self._tools = MappingProxyType(table)

    def list_tools(self) -> Tuple[ToolDescriptor, ...]:
        return tuple(self._tools.values())

    def describe(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


TOOL_REGISTRY = ToolRegistry([KNOWLEDGE_TOOL, FEEDBACK_TOOL])
