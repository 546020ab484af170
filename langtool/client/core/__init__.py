"""Core components."""

from .enums import DispatchMode, Level
from .exceptions import (
    OVERLOADED_MESSAGE,
    EmptyMergeInputError,
    FragmentCheckError,
    InvalidDataAnnotationError,
    InvalidRequestError,
    InvalidValueError,
    LanguageToolError,
    PositionMappingError,
    RateLimitError,
    ServerError,
    ServerOverloadedError,
    is_transient_overload,
)
from .validation import AUTO_LANGUAGE, parse_language_code, parse_port, parse_word

__all__ = [
    "AUTO_LANGUAGE",
    "DispatchMode",
    "Level",
    "OVERLOADED_MESSAGE",
    "LanguageToolError",
    "InvalidRequestError",
    "InvalidDataAnnotationError",
    "InvalidValueError",
    "EmptyMergeInputError",
    "ServerError",
    "ServerOverloadedError",
    "RateLimitError",
    "FragmentCheckError",
    "PositionMappingError",
    "is_transient_overload",
    "parse_language_code",
    "parse_port",
    "parse_word",
]
