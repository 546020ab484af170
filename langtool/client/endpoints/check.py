"""Check endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from ..config import CHECK_PATH
from ..models import CheckRequest, CheckResponse
from ..runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return CHECK_PATH


def build_form(params: dict[str, Any]) -> dict[str, str]:
    """Build the form body from the ``request`` param."""
    request: CheckRequest = params["request"]
    return request.to_form()


def build_headers(params: dict[str, Any]) -> dict[str, str]:
    return {"Accept": "application/json"}


SPEC = RestEndpointSpec(
    id="check",
    method="POST",
    build_path=build_path,
    build_form=build_form,
    build_headers=build_headers,
)


class Adapter(ResponseAdapter):
    """Adapter parsing a check response.

    With a positive ``max_suggestions`` param, replacement lists are cut
    down to that many entries.
    """

    def parse(self, response: Any, params: dict[str, Any]) -> CheckResponse:
        result = CheckResponse.model_validate(response)
        max_suggestions = params.get("max_suggestions", -1)
        if max_suggestions > 0:
            result = result.truncate_replacements(max_suggestions)
        return result
