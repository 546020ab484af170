"""Request builder for fluent CheckRequest construction.

Architecture:
    The request builder implements the Builder pattern to provide a fluent,
    chainable API for constructing CheckRequest objects with many options.
    Values are collected on the builder and validated once in build().

Design Decisions:
    - Fluent API: Method chaining improves readability for complex requests
    - Immutable result: build() returns a frozen CheckRequest
    - Language codes are checked at the call site, so a typo fails where it
      was written rather than at the server

Example:
    >>> request = (CheckRequestBuilder()
    ...     .text("Some phrase with a smal mistake.")
    ...     .language("en-US")
    ...     .disabled_rules("WHITESPACE_RULE")
    ...     .build())
"""

from __future__ import annotations

from typing import Any

from ..core.enums import Level
from ..core.validation import parse_language_code
from ..models import CheckRequest, Data

__all__ = ["CheckRequestBuilder", "check_request"]


class CheckRequestBuilder:
    """Fluent builder for CheckRequest."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def text(self, text: str) -> CheckRequestBuilder:
        """Set the text to check, replacing any annotated document."""
        self._values["text"] = text
        self._values.pop("data", None)
        return self

    def data(self, data: Data | str) -> CheckRequestBuilder:
        """Set the annotated document (model or JSON string), replacing any text."""
        if isinstance(data, str):
            data = Data.from_json(data)
        self._values["data"] = data
        self._values.pop("text", None)
        return self

    def language(self, code: str) -> CheckRequestBuilder:
        """Set the language code.

        Raises:
            InvalidValueError: If ``code`` is not "auto" or a language code
        """
        self._values["language"] = parse_language_code(code)
        return self

    def mother_tongue(self, code: str) -> CheckRequestBuilder:
        self._values["mother_tongue"] = parse_language_code(code)
        return self

    def login(self, username: str, api_key: str) -> CheckRequestBuilder:
        """Set premium credentials."""
        self._values["username"] = username
        self._values["api_key"] = api_key
        return self

    def dicts(self, *names: str) -> CheckRequestBuilder:
        self._values["dicts"] = list(names)
        return self

    def preferred_variants(self, *codes: str) -> CheckRequestBuilder:
        self._values["preferred_variants"] = [parse_language_code(c) for c in codes]
        return self

    def enabled_rules(self, *ids: str) -> CheckRequestBuilder:
        self._values["enabled_rules"] = list(ids)
        return self

    def disabled_rules(self, *ids: str) -> CheckRequestBuilder:
        self._values["disabled_rules"] = list(ids)
        return self

    def enabled_categories(self, *ids: str) -> CheckRequestBuilder:
        self._values["enabled_categories"] = list(ids)
        return self

    def disabled_categories(self, *ids: str) -> CheckRequestBuilder:
        self._values["disabled_categories"] = list(ids)
        return self

    def enabled_only(self, value: bool = True) -> CheckRequestBuilder:
        """Only run the enabled rules and categories."""
        self._values["enabled_only"] = value
        return self

    def level(self, level: Level | str) -> CheckRequestBuilder:
        self._values["level"] = Level(level)
        return self

    def build(self) -> CheckRequest:
        """Build the request.

        A request without text or data can be built; it is rejected when
        sent or split.
        """
        return CheckRequest(**self._values)


def check_request() -> CheckRequestBuilder:
    """Create a new builder."""
    return CheckRequestBuilder()
