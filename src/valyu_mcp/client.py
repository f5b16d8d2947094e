"""
HTTP client for the Valyu API.

One POST per call, no retries and no caching. Response bodies are returned
verbatim as parsed JSON; the client does not interpret API-specific fields.
"""

import logging
from typing import Any, Optional

import requests

from .credentials import APICredential
from .errors import TransportError, UpstreamError
from .schemas import FeedbackRequest, KnowledgeRequest

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://api.valyu.network"
KNOWLEDGE_PATH = "/v1/knowledge"
FEEDBACK_PATH = "/v1/feedback"


class ValyuClient:
    """
    Thin authenticated client for the knowledge and feedback endpoints.

    Raises:
        UpstreamError: non-success HTTP status or a non-JSON success body
        TransportError: the request never got a response
    """

    def __init__(
        self,
        credential: APICredential,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self._credential = credential
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def knowledge(self, request: KnowledgeRequest) -> Any:
        return self._post(KNOWLEDGE_PATH, request.to_payload())

    def feedback(self, request: FeedbackRequest) -> Any:
        return self._post(FEEDBACK_PATH, request.to_payload())

    def close(self) -> None:
        self._session.close()

    def _post(self, path: str, payload: dict) -> Any:
        url = self.base_url + path
        logger.debug("POST %s", url)

        try:
            response = self._session.post(
                url,
                json=payload,
                headers=self._credential.headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e), details={"url": url}) from e

        if not response.ok:
            raise UpstreamError(
                f"API request failed: {response.reason}",
                status_code=response.status_code,
                details={"url": url},
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON in API response: {e}",
                status_code=response.status_code,
                details={"url": url},
            ) from e
