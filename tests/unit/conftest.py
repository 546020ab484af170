"""Shared factories for response objects."""

from __future__ import annotations

import pytest

from langtool.client.models import CheckResponse, Match


def _match_payload(offset: int, length: int, rule_id: str, replacements: list[str]) -> dict:
    return {
        "offset": offset,
        "length": length,
        "message": f"Issue found by {rule_id}.",
        "shortMessage": "",
        "replacements": [{"value": r} for r in replacements],
        "rule": {
            "id": rule_id,
            "description": "Possible Typo",
            "issueType": "misspelling",
            "category": {"id": "TYPOS", "name": "Possible Typo"},
        },
        "sentence": "",
        "context": {"text": "", "offset": 0, "length": length},
    }


def _response_payload(matches: list[dict], sentence_ranges=None, incomplete=None) -> dict:
    payload = {
        "software": {
            "name": "LanguageTool",
            "version": "6.4",
            "buildDate": "2024-03-28 13:03:43 +0000",
            "apiVersion": 1,
            "premium": False,
            "status": "",
        },
        "language": {
            "code": "en-US",
            "name": "English (US)",
            "detectedLanguage": {"code": "en-US", "name": "English (US)"},
        },
        "matches": matches,
    }
    if sentence_ranges is not None:
        payload["sentenceRanges"] = sentence_ranges
    if incomplete is not None:
        payload["warnings"] = {"incompleteResults": incomplete}
    return payload


@pytest.fixture
def match_payload():
    """Factory of raw match JSON objects."""

    def make(offset: int, length: int = 1, rule_id: str = "RULE", replacements=()) -> dict:
        return _match_payload(offset, length, rule_id, list(replacements))

    return make


@pytest.fixture
def response_payload():
    """Factory of raw check response JSON objects."""
    return _response_payload


@pytest.fixture
def make_match():
    """Factory of Match models."""

    def make(offset: int, length: int = 1, rule_id: str = "RULE", replacements=()) -> Match:
        return Match.model_validate(_match_payload(offset, length, rule_id, list(replacements)))

    return make


@pytest.fixture
def make_response():
    """Factory of CheckResponse models built from match offsets or Match objects."""

    def make(matches=(), sentence_ranges=None, incomplete=None) -> CheckResponse:
        raw = [
            m.model_dump(by_alias=True, exclude_none=True)
            if isinstance(m, Match)
            else _match_payload(m, 1, "RULE", [])
            for m in matches
        ]
        return CheckResponse.model_validate(
            _response_payload(raw, sentence_ranges=sentence_ranges, incomplete=incomplete)
        )

    return make
