"""
Server configuration.

Settings come from an optional YAML file, overridden by environment
variables. The API key is deliberately absent here: it is read only from
VALYU_API_KEY (see credentials.py).
"""

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml

from .client import DEFAULT_BASE_URL
from .errors import ConfigurationError


@dataclass
class ServerConfig:
    """
    Valyu MCP server configuration.

    Attributes:
        base_url: Valyu API host (default: https://api.valyu.network)
        timeout: Upstream request timeout in seconds (default: None, no timeout)
        transport: Transport mode ("stdio" or "sse", default: "stdio")
        host: Server bind address (SSE only)
        port: Server port (SSE only)
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    transport: Literal["stdio", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000

    def __post_init__(self):
        if self.transport not in ("stdio", "sse"):
            raise ConfigurationError(
                f"Invalid transport '{self.transport}'. Must be 'stdio' or 'sse'."
            )
        # File values arrive as whatever YAML parsed them to
        self.port = _parse_number("port", self.port, int)
        if self.timeout is not None:
            self.timeout = _parse_number("timeout", self.timeout, float)
            if self.timeout <= 0:
                raise ConfigurationError(f"Invalid timeout: {self.timeout}. Must be positive.")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "ServerConfig":
        """
        Load configuration from a YAML file and the environment.

        Falls back to defaults if no file is given. Environment variables
        override file values.

        Args:
            config_file: Optional path to a YAML settings file

        Returns:
            ServerConfig instance with loaded/default values

        Raises:
            ConfigurationError: If the file is missing, malformed, or a value is invalid
        """
        config_dict: Dict[str, Any] = {}

        if config_file is not None:
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
            try:
                with open(config_file) as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid config file {config_file}: {e}") from e
            if not isinstance(config_dict, dict):
                raise ConfigurationError(
                    f"Invalid config file {config_file}: expected a mapping"
                )

        if "VALYU_BASE_URL" in os.environ:
            config_dict["base_url"] = os.environ["VALYU_BASE_URL"]

        if "VALYU_TIMEOUT" in os.environ:
            config_dict["timeout"] = _parse_number("VALYU_TIMEOUT", os.environ["VALYU_TIMEOUT"], float)

        if "MCP_SERVER_TRANSPORT" in os.environ:
            config_dict["transport"] = os.environ["MCP_SERVER_TRANSPORT"]

        if "MCP_SERVER_HOST" in os.environ:
            config_dict["host"] = os.environ["MCP_SERVER_HOST"]

        if "MCP_SERVER_PORT" in os.environ:
            config_dict["port"] = _parse_number("MCP_SERVER_PORT", os.environ["MCP_SERVER_PORT"], int)

        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})

    def as_dict(self) -> Dict[str, Any]:
        """Settings as a plain dict for display."""
        return asdict(self)


def _parse_number(name: str, value: Any, kind):
    if isinstance(value, bool):
        value = str(value)
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid {name}: {value}. "
            f"Must be {'an integer' if kind is int else 'a number'}."
        )
