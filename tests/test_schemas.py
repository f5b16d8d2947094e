"""
Tests for request schemas and argument validation.

Tests cover:
- Default substitution for optional knowledge fields
- Required fields, enum membership and numeric bounds
- Strict primitive type matching
- Tagged Ok/Err results instead of raised exceptions
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from valyu_mcp.errors import ValidationError
from valyu_mcp.schemas import (
    Err,
    FeedbackRequest,
    KnowledgeRequest,
    Ok,
    validate_arguments,
    validate_request,
)


VALID_KNOWLEDGE = {
    "query": "quantum error correction",
    "search_type": "all",
    "max_price": 10,
}

VALID_FEEDBACK = {
    "tx_id": "tx-123",
    "feedback": "Very relevant results",
    "sentiment": "very good",
}


class TestKnowledgeValidation:
    """Test knowledge tool argument validation."""

    def test_defaults_applied(self):
        """Missing optional fields receive their defaults."""
        result = validate_arguments("knowledge", VALID_KNOWLEDGE)

        assert isinstance(result, Ok)
        request = result.value
        assert request.max_num_results == 10
        assert request.similarity_threshold == 0.4
        assert request.query_rewrite is True
        assert request.data_sources is None

    def test_overrides_kept(self):
        """Explicit optional values replace the defaults."""
        result = validate_arguments("knowledge", {
            **VALID_KNOWLEDGE,
            "data_sources": ["arxiv", "pubmed"],
            "max_num_results": 3,
            "similarity_threshold": 0.9,
            "query_rewrite": False,
        })

        assert result.ok
        request = result.value
        assert request.data_sources == ["arxiv", "pubmed"]
        assert request.max_num_results == 3
        assert request.similarity_threshold == 0.9
        assert request.query_rewrite is False

    @pytest.mark.parametrize("threshold", [0, 1, 0.5])
    def test_threshold_bounds_inclusive(self, threshold):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "similarity_threshold": threshold})
        assert result.ok

    @pytest.mark.parametrize("threshold", [-0.01, 1.01, 5])
    def test_threshold_out_of_range(self, threshold):
        """similarity_threshold outside [0, 1] is rejected."""
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "similarity_threshold": threshold})

        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)
        assert "similarity_threshold" in result.error.message

    @pytest.mark.parametrize("value", [0, -1, 2.5])
    def test_max_num_results_must_be_positive_integer(self, value):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "max_num_results": value})

        assert not result.ok
        assert "max_num_results" in result.error.message

    def test_invalid_search_type(self):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "search_type": "images"})

        assert not result.ok
        assert "search_type" in result.error.message

    def test_missing_required_fields_all_reported(self):
        """Every missing required field is named in the message."""
        result = validate_arguments("knowledge", {})

        assert not result.ok
        for field in ("query", "search_type", "max_price"):
            assert field in result.error.message

    def test_string_not_coerced_to_number(self):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "max_price": "10"})

        assert not result.ok
        assert "max_price" in result.error.message

    def test_integer_accepted_as_number(self):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "max_price": 25})

        assert result.ok
        assert result.value.max_price == 25.0

    def test_number_not_coerced_to_boolean(self):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "query_rewrite": 1})

        assert not result.ok
        assert "query_rewrite" in result.error.message

    def test_data_sources_must_be_strings(self):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "data_sources": ["ok", 3]})

        assert not result.ok
        assert "data_sources" in result.error.message

    def test_unknown_keys_ignored(self):
        result = validate_arguments("knowledge", {**VALID_KNOWLEDGE, "extra": "ignored"})

        assert result.ok
        assert "extra" not in result.value.to_payload()

    def test_payload_omits_unset_data_sources(self):
        request = validate_arguments("knowledge", VALID_KNOWLEDGE).value

        assert request.to_payload() == {
            "query": "quantum error correction",
            "search_type": "all",
            "max_price": 10.0,
            "max_num_results": 10,
            "similarity_threshold": 0.4,
            "query_rewrite": True,
        }


class TestFeedbackValidation:
    """Test feedback tool argument validation."""

    def test_valid_feedback(self):
        result = validate_arguments("feedback", VALID_FEEDBACK)

        assert isinstance(result, Ok)
        assert isinstance(result.value, FeedbackRequest)
        assert result.value.to_payload() == VALID_FEEDBACK

    @pytest.mark.parametrize("sentiment", ["very good", "good", "bad", "very bad"])
    def test_all_sentiments_accepted(self, sentiment):
        result = validate_arguments("feedback", {**VALID_FEEDBACK, "sentiment": sentiment})
        assert result.ok

    def test_invalid_sentiment(self):
        result = validate_arguments("feedback", {**VALID_FEEDBACK, "sentiment": "meh"})

        assert not result.ok
        assert "sentiment" in result.error.message

    def test_missing_tx_id(self):
        arguments = dict(VALID_FEEDBACK)
        del arguments["tx_id"]

        result = validate_arguments("feedback", arguments)

        assert not result.ok
        assert "tx_id" in result.error.message


class TestValidateRequest:
    """Test the generic validation entry points."""

    def test_non_mapping_rejected(self):
        result = validate_request(KnowledgeRequest, ["query"])

        assert not result.ok
        assert "expected an object" in result.error.message

    def test_none_treated_as_empty(self):
        result = validate_request(FeedbackRequest, None)

        assert not result.ok
        assert "tx_id" in result.error.message

    def test_unknown_tool_has_no_schema(self):
        result = validate_arguments("translate", {})

        assert not result.ok
        assert "translate" in result.error.message

    def test_validation_does_not_raise(self):
        """Invalid input yields Err rather than an exception."""
        result = validate_arguments("knowledge", {"query": 42})
        assert isinstance(result, Err)

    def test_request_is_immutable(self):
        request = validate_arguments("knowledge", VALID_KNOWLEDGE).value

        with pytest.raises(PydanticValidationError):
            request.query = "changed"
