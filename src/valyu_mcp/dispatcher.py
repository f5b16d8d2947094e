"""
Tool invocation dispatcher.

Every `handle_call_tool` path ends in a ToolResponseEnvelope: failures are
returned as data (`isError=true`) and never raised to the protocol layer.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .client import ValyuClient
from .errors import UnknownToolError, ValyuMCPError
from .schemas import Err, Ok, Result, validate_arguments
from .tools.registry import TOOL_REGISTRY, ToolDescriptor, ToolRegistry

logger = logging.getLogger(__name__)


ERROR_PREFIX = "API error: "


@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ToolResponseEnvelope:
    """Response for one tool invocation."""

    content: List[TextContent] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        return "".join(item.text for item in self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in MCP `CallToolResult` shape (isError only when set)."""
        result: Dict[str, Any] = {"content": [item.to_dict() for item in self.content]}
        if self.is_error:
            result["isError"] = True
        return result

    @classmethod
    def success(cls, text: str) -> "ToolResponseEnvelope":
        return cls(content=[TextContent(text)])

    @classmethod
    def error(cls, text: str) -> "ToolResponseEnvelope":
        return cls(content=[TextContent(text)], is_error=True)


class RequestDispatcher:
    """Routes `tools/list` and `tools/call` requests to the Valyu client."""

    def __init__(self, client: ValyuClient, registry: ToolRegistry = TOOL_REGISTRY):
        self.client = client
        self.registry = registry
        self._operations: Dict[str, Callable[[Any], Any]] = {
            "knowledge": client.knowledge,
            "feedback": client.feedback,
        }

    def handle_list_tools(self) -> Tuple[ToolDescriptor, ...]:
        return self.registry.list_tools()

    def handle_call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]] = None,
    ) -> ToolResponseEnvelope:
        """
        Validate, invoke and wrap one tool call.

        Args:
            name: Tool name from the host request
            arguments: Untyped tool arguments

        Returns:
            Success envelope with the JSON response text, or an error envelope
        """
        logger.debug("Tool call: %s", name)
        try:
            if self.registry.describe(name) is None or name not in self._operations:
                return self._failure(UnknownToolError(name), prefix="")

            validated = validate_arguments(name, arguments)
            if isinstance(validated, Err):
                return self._failure(validated.error)

            called = self._invoke(name, validated.value)
            if isinstance(called, Err):
                return self._failure(called.error)

            serialized = self._serialize(called.value)
            if isinstance(serialized, Err):
                return self._failure(serialized.error)

            return ToolResponseEnvelope.success(serialized.value)

        except Exception as e:
            logger.exception("Unexpected error in tool %r", name)
            return ToolResponseEnvelope.error(f"{ERROR_PREFIX}{e}")

    def _invoke(self, name: str, request: Any) -> Result:
        try:
            return Ok(self._operations[name](request))
        except ValyuMCPError as e:
            return Err(e)

    def _serialize(self, response: Any) -> Result:
        try:
            return Ok(json.dumps(response, separators=(",", ":"), ensure_ascii=False))
        except (TypeError, ValueError) as e:
            return Err(ValyuMCPError(f"Response is not JSON serializable: {e}"))

    def _failure(self, error: ValyuMCPError, prefix: str = ERROR_PREFIX) -> ToolResponseEnvelope:
        logger.warning("Tool call failed [%s]: %s", error.category, error.message)
        return ToolResponseEnvelope.error(f"{prefix}{error.message}")
