"""Personal dictionary endpoint definitions.

``/words`` lists words with query parameters; ``/words/add`` and
``/words/delete`` take form bodies. All three need a premium login.
"""

from __future__ import annotations

from typing import Any

from ..config import WORDS_ADD_PATH, WORDS_DELETE_PATH, WORDS_PATH
from ..models import (
    WordsAddRequest,
    WordsAddResponse,
    WordsDeleteRequest,
    WordsDeleteResponse,
    WordsRequest,
    WordsResponse,
)
from ..runtime.rest import ModelAdapter, RestEndpointSpec


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    request: WordsRequest = params["request"]
    return request.to_params()


def build_change_form(params: dict[str, Any]) -> dict[str, str]:
    request: WordsAddRequest | WordsDeleteRequest = params["request"]
    return request.to_form()


LIST_SPEC = RestEndpointSpec(
    id="words",
    method="GET",
    build_path=lambda params: WORDS_PATH,
    build_query=build_list_query,
)

ADD_SPEC = RestEndpointSpec(
    id="words_add",
    method="POST",
    build_path=lambda params: WORDS_ADD_PATH,
    build_form=build_change_form,
)

DELETE_SPEC = RestEndpointSpec(
    id="words_delete",
    method="POST",
    build_path=lambda params: WORDS_DELETE_PATH,
    build_form=build_change_form,
)

LIST_ADAPTER = ModelAdapter(WordsResponse)
ADD_ADAPTER = ModelAdapter(WordsAddResponse)
DELETE_ADAPTER = ModelAdapter(WordsDeleteResponse)

__all__ = [
    "LIST_SPEC",
    "ADD_SPEC",
    "DELETE_SPEC",
    "LIST_ADAPTER",
    "ADD_ADAPTER",
    "DELETE_ADAPTER",
]
