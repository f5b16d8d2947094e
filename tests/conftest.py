"""Shared fixtures for Valyu MCP server tests."""

from unittest.mock import MagicMock

import pytest
import requests

from valyu_mcp.client import ValyuClient
from valyu_mcp.credentials import APICredential
from valyu_mcp.dispatcher import RequestDispatcher


TEST_API_KEY = "test-valyu-key-1234"


def make_response(status_code=200, reason="OK", json_data=None, json_error=None):
    """Build a stub requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.ok = status_code < 400
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment settings out of the tests."""
    for variable in (
        "VALYU_API_KEY",
        "VALYU_BASE_URL",
        "VALYU_TIMEOUT",
        "MCP_SERVER_TRANSPORT",
        "MCP_SERVER_HOST",
        "MCP_SERVER_PORT",
    ):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def credential():
    return APICredential(TEST_API_KEY)


@pytest.fixture
def session():
    """Stub HTTP session answering {"result": "ok"} by default."""
    stub = MagicMock(spec=requests.Session)
    stub.post.return_value = make_response(json_data={"result": "ok"})
    return stub


@pytest.fixture
def client(credential, session):
    return ValyuClient(credential, session=session)


@pytest.fixture
def dispatcher(client):
    return RequestDispatcher(client)
