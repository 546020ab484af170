"""Shared LanguageTool server constants.

This module centralizes the server URL, API paths and CLI defaults so the
client and the command line stay small and focused.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .core.exceptions import OVERLOADED_MESSAGE, InvalidValueError
from .core.validation import parse_port
from .runtime.chunking.definitions import DEFAULT_MAX_LENGTH, DEFAULT_SPLIT_PATTERN

# Public LanguageTool server (free tier, premium with username + API key)
DEFAULT_HOSTNAME = "https://api.languagetoolplus.com"

API_PATH = "/v2"

# Endpoint paths, relative to API_PATH
CHECK_PATH = "/check"
LANGUAGES_PATH = "/languages"
WORDS_PATH = "/words"
WORDS_ADD_PATH = "/words/add"
WORDS_DELETE_PATH = "/words/delete"

DEFAULT_MAX_SUGGESTIONS = 5

HOSTNAME_ENV = "LANGUAGETOOL_HOSTNAME"
PORT_ENV = "LANGUAGETOOL_PORT"
USERNAME_ENV = "LANGUAGETOOL_USERNAME"
API_KEY_ENV = "LANGUAGETOOL_API_KEY"

__all__ = [
    "API_PATH",
    "DEFAULT_HOSTNAME",
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_MAX_SUGGESTIONS",
    "DEFAULT_SPLIT_PATTERN",
    "OVERLOADED_MESSAGE",
    "ServerConfig",
]


@dataclass(frozen=True)
class ServerConfig:
    """Location of a LanguageTool server.

    Attributes:
        hostname: Scheme and host, e.g. ``"http://localhost"``
        port: Either empty or four digits
    """

    hostname: str = DEFAULT_HOSTNAME
    port: str = ""

    def __post_init__(self) -> None:
        parse_port(self.port)

    @property
    def base_url(self) -> str:
        """``hostname[:port]`` without trailing slash.

        Examples:
            >>> ServerConfig("http://localhost", "8081").base_url
            'http://localhost:8081'
        """
        hostname = self.hostname.rstrip("/")
        if self.port:
            return f"{hostname}:{self.port}"
        return hostname

    @property
    def api_url(self) -> str:
        """Base URL of the v2 API."""
        return f"{self.base_url}{API_PATH}"

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Read ``LANGUAGETOOL_HOSTNAME`` and ``LANGUAGETOOL_PORT``.

        Raises:
            InvalidValueError: If a variable is missing or the port is invalid
        """
        hostname = os.environ.get(HOSTNAME_ENV)
        if hostname is None:
            raise InvalidValueError(f"environment variable {HOSTNAME_ENV} is not set")
        port = os.environ.get(PORT_ENV)
        if port is None:
            raise InvalidValueError(f"environment variable {PORT_ENV} is not set")
        return cls(hostname=hostname, port=port)

    @classmethod
    def from_env_or_default(cls) -> ServerConfig:
        """Like ``from_env`` but falls back to the public server."""
        try:
            return cls.from_env()
        except InvalidValueError:
            return cls()
