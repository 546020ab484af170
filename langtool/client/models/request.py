"""Check request model.

Mirrors the ``POST /v2/check`` form API of LanguageTool. A request carries
exactly one of ``text`` or ``data``; the ``with_*`` helpers return copies and
keep that invariant.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.enums import Level
from ..core.exceptions import InvalidRequestError
from ..core.validation import AUTO_LANGUAGE
from .annotations import Data

# Form field name for every list option, joined with commas when sent
_LIST_FIELDS = {
    "dicts": "dicts",
    "preferred_variants": "preferredVariants",
    "enabled_rules": "enabledRules",
    "disabled_rules": "disabledRules",
    "enabled_categories": "enabledCategories",
    "disabled_categories": "disabledCategories",
}


def join_values(values: list[str] | None) -> str | None:
    """Join a list of option values into a comma separated string.

    Empty or missing lists serialize to ``None`` (field omitted).

    Examples:
        >>> join_values(["en-US", "de-DE"])
        'en-US,de-DE'
        >>> join_values([]) is None
        True
    """
    if not values:
        return None
    return ",".join(values)


class CheckRequest(BaseModel):
    """LanguageTool check request."""

    text: str | None = Field(None, description="Text to check; this or data is required")
    data: Data | None = Field(None, description="Annotated document; this or text is required")
    language: str = Field(AUTO_LANGUAGE, description="Language code like en-US, or auto")
    username: str | None = None
    api_key: str | None = Field(None, alias="apiKey")
    dicts: list[str] | None = None
    mother_tongue: str | None = Field(None, alias="motherTongue")
    preferred_variants: list[str] | None = Field(None, alias="preferredVariants")
    enabled_rules: list[str] | None = Field(None, alias="enabledRules")
    disabled_rules: list[str] | None = Field(None, alias="disabledRules")
    enabled_categories: list[str] | None = Field(None, alias="enabledCategories")
    disabled_categories: list[str] | None = Field(None, alias="disabledCategories")
    enabled_only: bool = Field(False, alias="enabledOnly")
    level: Level = Level.DEFAULT

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _check_text_or_data(self) -> CheckRequest:
        if self.text is not None and self.data is not None:
            raise ValueError("request must not contain both text and data")
        return self

    def with_text(self, text: str) -> CheckRequest:
        """Return a copy checking ``text``, dropping any data."""
        return self.model_copy(update={"text": text, "data": None})

    def with_data(self, data: Data) -> CheckRequest:
        """Return a copy checking ``data``, dropping any text."""
        return self.model_copy(update={"data": data, "text": None})

    def with_data_str(self, raw: str) -> CheckRequest:
        """Return a copy checking the JSON annotated document ``raw``."""
        return self.with_data(Data.from_json(raw))

    def with_language(self, language: str) -> CheckRequest:
        return self.model_copy(update={"language": language})

    def try_get_text(self) -> str:
        """Return the text (or effective text of the data) being checked.

        Raises:
            InvalidRequestError: If neither text nor data is set
            InvalidDataAnnotationError: If an annotation unit is empty
        """
        if self.text is not None:
            return self.text
        if self.data is not None:
            return self.data.text
        raise InvalidRequestError("missing either text or data field")

    def to_form(self) -> dict[str, str]:
        """Build the form body sent to ``/v2/check``."""
        form: dict[str, str] = {}

        if self.text is not None:
            form["text"] = self.text
        elif self.data is not None:
            form["data"] = self.data.to_json()

        form["language"] = self.language or AUTO_LANGUAGE

        if self.username is not None:
            form["username"] = self.username
        if self.api_key is not None:
            form["apiKey"] = self.api_key
        if self.mother_tongue is not None:
            form["motherTongue"] = self.mother_tongue

        for attr, key in _LIST_FIELDS.items():
            joined = join_values(getattr(self, attr))
            if joined is not None:
                form[key] = joined

        if self.enabled_only:
            form["enabledOnly"] = "true"
        if not self.level.is_default:
            form["level"] = self.level.value

        return form
