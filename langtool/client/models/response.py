"""Check response models.

These models follow the JSON returned by ``POST /v2/check``. Field names are
snake_case with camelCase aliases; unknown fields sent by newer servers are
ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


class DetectedLanguage(BaseModel):
    """Language detected by the server."""

    code: str
    name: str
    confidence: float | None = None
    source: str | None = None

    model_config = _CONFIG


class LanguageResponse(BaseModel):
    """Language information of a check response."""

    code: str = Field(..., description='Language code, e.g. "sk-SK"')
    name: str = Field(..., description='Language name, e.g. "Slovak"')
    detected_language: DetectedLanguage = Field(..., alias="detectedLanguage")

    model_config = _CONFIG


class Context(BaseModel):
    """Text surrounding a match, used for display only."""

    text: str
    offset: int = Field(..., ge=0, description="Char index of the match inside text")
    length: int = Field(..., ge=0)

    model_config = _CONFIG


class MoreContext(BaseModel):
    """Position of a match computed against the original text."""

    line_number: int = Field(..., ge=1)
    line_offset: int = Field(..., ge=0)

    model_config = _CONFIG


class Replacement(BaseModel):
    """Possible replacement for a match."""

    value: str

    model_config = _CONFIG


class Category(BaseModel):
    id: str
    name: str

    model_config = _CONFIG


class Url(BaseModel):
    value: str

    model_config = _CONFIG


class Rule(BaseModel):
    """Rule that produced a match."""

    id: str
    description: str
    issue_type: str = Field(..., alias="issueType")
    category: Category
    sub_id: str | None = Field(None, alias="subId")
    urls: list[Url] | None = None
    is_premium: bool | None = Field(None, alias="isPremium")
    source_file: str | None = Field(None, alias="sourceFile")

    model_config = _CONFIG


class MatchType(BaseModel):
    type_name: str = Field(..., alias="typeName")

    model_config = _CONFIG


class Match(BaseModel):
    """One issue flagged by the server.

    ``offset`` is relative to the text the match was computed from. After
    joining split responses it is relative to the whole document.
    """

    offset: int = Field(..., ge=0, description="Char index at which the match starts")
    length: int = Field(..., ge=0)
    message: str
    short_message: str = Field("", alias="shortMessage")
    replacements: list[Replacement] = Field(default_factory=list)
    rule: Rule
    sentence: str = ""
    context: Context | None = None
    type: MatchType | None = None
    context_for_sure_match: int | None = Field(None, alias="contextForSureMatch")
    ignore_for_incomplete_sentence: bool | None = Field(
        None, alias="ignoreForIncompleteSentence"
    )
    more_context: MoreContext | None = Field(None, alias="moreContext")

    model_config = _CONFIG

    def shifted(self, offset: int) -> Match:
        """Return a copy whose offset is moved ``offset`` chars forward."""
        return self.model_copy(update={"offset": self.offset + offset})

    def with_position(self, line_number: int, line_offset: int) -> Match:
        return self.model_copy(
            update={"more_context": MoreContext(line_number=line_number, line_offset=line_offset)}
        )


class Software(BaseModel):
    """LanguageTool software details."""

    name: str
    version: str
    build_date: str = Field(..., alias="buildDate")
    api_version: int = Field(..., alias="apiVersion")
    premium: bool = False
    premium_hint: str | None = Field(None, alias="premiumHint")
    status: str = ""

    model_config = _CONFIG


class Warnings(BaseModel):
    incomplete_results: bool = Field(False, alias="incompleteResults")

    model_config = _CONFIG


class CheckResponse(BaseModel):
    """LanguageTool check response."""

    software: Software
    language: LanguageResponse
    matches: list[Match] = Field(default_factory=list)
    sentence_ranges: list[tuple[int, int]] | None = Field(None, alias="sentenceRanges")
    warnings: Warnings | None = None

    model_config = _CONFIG

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    def truncate_replacements(self, max_suggestions: int) -> CheckResponse:
        """Keep at most ``max_suggestions`` replacements per match.

        A trailing ``"... (N not shown)"`` entry tells how many were dropped.
        A non-positive ``max_suggestions`` keeps everything.
        """
        if max_suggestions <= 0:
            return self

        matches = []
        for m in self.matches:
            hidden = len(m.replacements) - max_suggestions
            if hidden > 0:
                kept = m.replacements[:max_suggestions]
                kept.append(Replacement(value=f"... ({hidden} not shown)"))
                m = m.model_copy(update={"replacements": kept})
            matches.append(m)
        return self.model_copy(update={"matches": matches})
