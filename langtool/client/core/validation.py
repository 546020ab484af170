"""Validation helpers for user supplied values.

These are shared by the CLI and by anyone building requests by hand. They
only check the shape of a value: a well formed language code is not
guaranteed to be supported by the server.
"""

from __future__ import annotations

from .exceptions import InvalidValueError

AUTO_LANGUAGE = "auto"


def _is_language_code(value: str) -> bool:
    parts = value.split("-")

    head = parts[0]
    if len(head) not in (2, 3) or not (head.isascii() and head.isalpha()):
        return False

    if len(parts) == 1:
        return True

    region = parts[1]
    if len(region) != 2 or not (region.isascii() and region.isalpha()):
        return False

    return all(part.isascii() and part.isalpha() for part in parts[2:])


def parse_language_code(value: str) -> str:
    """Validate a language code.

    A valid code is ``"auto"`` or matches
    ``^[a-zA-Z]{2,3}(-[a-zA-Z]{2}(-[a-zA-Z]+)*)?$``, case-insensitive.

    Examples:
        >>> parse_language_code("en-US")
        'en-US'
        >>> parse_language_code("ca-ES-valencia")
        'ca-ES-valencia'

    Raises:
        InvalidValueError: If the value is not a language code
    """
    if value == AUTO_LANGUAGE or _is_language_code(value):
        return value
    raise InvalidValueError(
        'The value should be "auto" or match regex pattern: '
        "^[a-zA-Z]{2,3}(-[a-zA-Z]{2}(-[a-zA-Z]+)*)?$"
    )


def parse_port(value: str) -> str:
    """Validate a port: either empty or exactly four digits."""
    if value == "" or (len(value) == 4 and value.isdigit()):
        return value
    raise InvalidValueError("The value should be a 4 characters long string with digits only")


def parse_word(value: str) -> str:
    """Validate a dictionary word, which must not contain whitespace."""
    if value and not any(c.isspace() for c in value):
        return value
    raise InvalidValueError("The value should be a word that does not contain any whitespace")
