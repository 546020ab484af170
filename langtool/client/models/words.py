"""Personal dictionary requests and responses (``/v2/words``).

All word endpoints require a premium login: the username used on
languagetool.org and an API key.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.validation import parse_word
from .request import join_values

_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


class LoginArgs(BaseModel):
    username: str = Field(..., min_length=1)
    api_key: str = Field(..., alias="apiKey", min_length=1)

    model_config = _CONFIG

    def to_params(self) -> dict[str, str]:
        return {"username": self.username, "apiKey": self.api_key}


class WordsRequest(BaseModel):
    """List words of the user's dictionaries."""

    login: LoginArgs
    offset: int | None = Field(None, ge=0)
    limit: int | None = Field(None, ge=1)
    dicts: list[str] | None = None

    model_config = _CONFIG

    def to_params(self) -> dict[str, str]:
        params = self.login.to_params()
        if self.offset is not None:
            params["offset"] = str(self.offset)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        dicts = join_values(self.dicts)
        if dicts is not None:
            params["dicts"] = dicts
        return params


class _WordChange(BaseModel):
    word: str
    login: LoginArgs
    dictionary: str | None = Field(None, alias="dict")

    model_config = _CONFIG

    @field_validator("word")
    @classmethod
    def validate_word(cls, v: str) -> str:
        return parse_word(v)

    def to_form(self) -> dict[str, str]:
        form = {"word": self.word, **self.login.to_params()}
        if self.dictionary is not None:
            form["dict"] = self.dictionary
        return form


class WordsAddRequest(_WordChange):
    """Add a word to a personal dictionary (created if missing)."""


class WordsDeleteRequest(_WordChange):
    """Remove a word from a personal dictionary."""


class WordsResponse(BaseModel):
    words: list[str] = Field(default_factory=list)

    model_config = _CONFIG


class WordsAddResponse(BaseModel):
    added: bool

    model_config = _CONFIG


class WordsDeleteResponse(BaseModel):
    deleted: bool

    model_config = _CONFIG
