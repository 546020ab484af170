"""LanguageTool client - async client library and CLI for LanguageTool servers."""

from .annotate import annotate
from .api import CheckRequestBuilder, check_request
from .clients import ServerClient
from .config import DEFAULT_HOSTNAME, ServerConfig
from .core import (
    DispatchMode,
    EmptyMergeInputError,
    FragmentCheckError,
    InvalidDataAnnotationError,
    InvalidRequestError,
    InvalidValueError,
    LanguageToolError,
    Level,
    PositionMappingError,
    RateLimitError,
    ServerError,
    ServerOverloadedError,
    parse_language_code,
)
from .models import (
    CheckRequest,
    CheckResponse,
    Data,
    DataAnnotation,
    Language,
    Match,
    ResponseWithContext,
    match_positions,
)
from .runtime.chunking import (
    DispatchPolicy,
    FragmentExecutor,
    FragmentPlanner,
    RetryPolicy,
    SplitPolicy,
    join_responses,
    split_data,
    split_text,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "ServerClient",
    "ServerConfig",
    "DEFAULT_HOSTNAME",
    # Requests
    "CheckRequest",
    "CheckRequestBuilder",
    "check_request",
    "Data",
    "DataAnnotation",
    "Level",
    # Responses
    "CheckResponse",
    "Match",
    "Language",
    "ResponseWithContext",
    "match_positions",
    "annotate",
    # Splitting
    "SplitPolicy",
    "RetryPolicy",
    "DispatchPolicy",
    "DispatchMode",
    "FragmentPlanner",
    "FragmentExecutor",
    "join_responses",
    "split_data",
    "split_text",
    # Validation
    "parse_language_code",
    # Exceptions
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
]
