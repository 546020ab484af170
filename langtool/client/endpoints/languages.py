"""Supported languages endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from ..config import LANGUAGES_PATH
from ..models import Language
from ..runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return LANGUAGES_PATH


SPEC = RestEndpointSpec(
    id="languages",
    method="GET",
    build_path=build_path,
)


class Adapter(ResponseAdapter):
    """Adapter parsing the list of supported languages."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[Language]:
        if not isinstance(response, list):
            raise ValueError(f"Invalid response format: expected list, got {type(response)}")
        return [Language.model_validate(item) for item in response]
