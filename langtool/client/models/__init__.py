"""Data models for the LanguageTool HTTP API.

Architecture:
    This module exports the Pydantic v2 models used throughout the library.
    Wire models are immutable (frozen=True); derived values such as shifted
    offsets or line positions are produced with model_copy().

Model Categories:
    - Requests: CheckRequest, Data, DataAnnotation, words requests
    - Responses: CheckResponse, Match and its parts, Language, words responses
    - Context: ResponseWithContext and the match position mapper
"""

from .annotations import Data, DataAnnotation
from .context import ResponseWithContext, match_positions
from .languages import Language
from .request import CheckRequest, join_values
from .response import (
    Category,
    CheckResponse,
    Context,
    DetectedLanguage,
    LanguageResponse,
    Match,
    MatchType,
    MoreContext,
    Replacement,
    Rule,
    Software,
    Url,
    Warnings,
)
from .words import (
    LoginArgs,
    WordsAddRequest,
    WordsAddResponse,
    WordsDeleteRequest,
    WordsDeleteResponse,
    WordsRequest,
    WordsResponse,
)

__all__ = [
    "Category",
    "CheckRequest",
    "CheckResponse",
    "Context",
    "Data",
    "DataAnnotation",
    "DetectedLanguage",
    "Language",
    "LanguageResponse",
    "LoginArgs",
    "Match",
    "MatchType",
    "MoreContext",
    "Replacement",
    "ResponseWithContext",
    "Rule",
    "Software",
    "Url",
    "Warnings",
    "WordsAddRequest",
    "WordsAddResponse",
    "WordsDeleteRequest",
    "WordsDeleteResponse",
    "WordsRequest",
    "WordsResponse",
    "join_values",
    "match_positions",
]
