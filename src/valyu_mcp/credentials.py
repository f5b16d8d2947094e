"""
Valyu API credential handling.

The credential is read once from the environment at process start and
passed by reference to the API client. It is never written to config files
and never logged in clear text.
"""

import os
from typing import Dict, Optional

from .errors import ConfigurationError


API_KEY_ENV_VAR = "VALYU_API_KEY"
"""Environment variable holding the Valyu API key."""

API_KEY_HEADER = "x-api-key"


def load_api_key_from_env() -> Optional[str]:
    """
    Load API key from environment variable.

    Returns:
        The API key if set and non-empty, None otherwise
    """
    return os.environ.get(API_KEY_ENV_VAR) or None


class APICredential:
    """
    Immutable holder for the Valyu API key.

    Example:
        credential = APICredential.from_env()
        client = ValyuClient(credential)
    """

    __slots__ = ("_api_key",)

    def __init__(self, api_key: str):
        """
        Initialize credential with an explicit API key.

        Raises:
            ConfigurationError: If the key is empty
        """
        if not api_key:
            raise ConfigurationError(
                f"{API_KEY_ENV_VAR} environment variable is required",
                details={"variable": API_KEY_ENV_VAR},
            )
        object.__setattr__(self, "_api_key", api_key)

    def __setattr__(self, name, value):
        raise AttributeError("APICredential is immutable")

    @classmethod
    def from_env(cls) -> "APICredential":
        """
        Build the credential from VALYU_API_KEY.

        Raises:
            ConfigurationError: If the variable is unset or empty
        """
        return cls(load_api_key_from_env() or "")

    @property
    def api_key(self) -> str:
        return self._api_key

    def headers(self) -> Dict[str, str]:
        """Headers attached to every upstream request."""
        return {
            API_KEY_HEADER: self._api_key,
            "Content-Type": "application/json",
        }

    def masked(self) -> str:
        """Return the key with everything but the last four characters hidden."""
        if len(self._api_key) <= 4:
            return "***"
        return "***" + self._api_key[-4:]

    def __repr__(self) -> str:
        return f"APICredential({self.masked()!r})"
