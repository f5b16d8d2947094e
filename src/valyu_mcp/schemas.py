"""
Request schemas and argument validation for the Valyu tools.

Validation never raises across the module boundary: `validate_arguments`
returns either `Ok(request)` with defaults applied, or `Err(ValidationError)`
naming every offending field.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Literal, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError, ValyuMCPError


T = TypeVar("T")

SearchType = Literal["proprietary", "web", "all"]
Sentiment = Literal["very good", "good", "bad", "very bad"]

DEFAULT_MAX_NUM_RESULTS = 10
DEFAULT_SIMILARITY_THRESHOLD = 0.4


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful stage result."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed stage result carrying the typed error."""

    error: ValyuMCPError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


class _RequestModel(BaseModel):
    # Strict: no str -> number or int -> bool coercion; unknown keys are dropped.
    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Wire body for the upstream API (unset optional fields omitted)."""
        return self.model_dump(exclude_none=True)


class KnowledgeRequest(_RequestModel):
    """Arguments of the `knowledge` tool (POST /v1/knowledge)."""

    query: str
    search_type: SearchType
    max_price: float
    data_sources: Optional[List[str]] = None
    max_num_results: int = Field(default=DEFAULT_MAX_NUM_RESULTS, gt=0)
    similarity_threshold: float = Field(default=DEFAULT_SIMILARITY_THRESHOLD, ge=0, le=1)
    query_rewrite: bool = True


class FeedbackRequest(_RequestModel):
    """Arguments of the `feedback` tool (POST /v1/feedback)."""

    tx_id: str
    feedback: str
    sentiment: Sentiment


REQUEST_MODELS: Dict[str, Type[_RequestModel]] = {
    "knowledge": KnowledgeRequest,
    "feedback": FeedbackRequest,
}


def _format_errors(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "arguments"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


def validate_request(model: Type[_RequestModel], arguments: Any) -> Result:
    """
    Validate raw tool arguments against a request model.

    Args:
        model: KnowledgeRequest or FeedbackRequest
        arguments: Untyped arguments as received from the host

    Returns:
        Ok(model instance) or Err(ValidationError)
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        return Err(ValidationError(
            f"arguments: expected an object, got {type(arguments).__name__}",
        ))

    try:
        return Ok(model.model_validate(dict(arguments)))
    except PydanticValidationError as e:
        return Err(ValidationError(
            _format_errors(e),
            details={"errors": e.errors(include_url=False, include_input=False)},
        ))


def validate_arguments(tool_name: str, arguments: Any) -> Result:
    """Select the request model registered for `tool_name` and validate."""
    model = REQUEST_MODELS.get(tool_name)
    if model is None:
        return Err(ValidationError(f"No request schema for tool: {tool_name}"))
    return validate_request(model, arguments)
