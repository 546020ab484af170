"""Annotated document model.

A document is a sequence of annotation units, each being either checkable
text or markup that the server skips (optionally read as ``interpret_as``,
e.g. ``<p>`` interpreted as a paragraph break).

Example JSON accepted by the server::

    {"annotation": [
        {"text": "A "},
        {"markup": "<b>"},
        {"text": "test"},
        {"markup": "</b>"}
    ]}
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.exceptions import InvalidDataAnnotationError


class DataAnnotation(BaseModel):
    """One atomic unit of an annotated document."""

    text: str | None = Field(None, description="Text treated as normal text")
    markup: str | None = Field(None, description="Text treated as markup")
    interpret_as: str | None = Field(
        None, alias="interpretAs", description="How the server should read the markup"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _check_exclusive(self) -> DataAnnotation:
        if self.text is None and self.markup is None:
            raise ValueError("annotation must contain either text or markup")
        if self.text is not None and self.markup is not None:
            raise ValueError("annotation must not contain both text and markup")
        if self.interpret_as is not None and self.markup is None:
            raise ValueError("interpret_as is only allowed alongside markup")
        return self

    @classmethod
    def new_text(cls, text: str) -> DataAnnotation:
        return cls(text=text)

    @classmethod
    def new_markup(cls, markup: str) -> DataAnnotation:
        return cls(markup=markup)

    @classmethod
    def new_interpreted_markup(cls, markup: str, interpret_as: str) -> DataAnnotation:
        return cls(markup=markup, interpret_as=interpret_as)

    @property
    def is_text(self) -> bool:
        return self.text is not None

    def try_get_text(self) -> str:
        """Return the text or markup of this unit.

        Raises:
            InvalidDataAnnotationError: If the unit holds neither
        """
        if self.text is not None:
            return self.text
        if self.markup is not None:
            return self.markup
        raise InvalidDataAnnotationError(f"missing either text or markup field in {self!r}")

    @property
    def char_length(self) -> int:
        """Length of text plus markup, used for fragment sizing."""
        return len(self.text or "") + len(self.markup or "")


class Data(BaseModel):
    """Ordered sequence of annotation units.

    Insertion order defines textual order. The effective text of a document
    is the concatenation of every unit's text or markup.
    """

    annotation: list[DataAnnotation] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_units(cls, units: Iterable[DataAnnotation]) -> Data:
        return cls(annotation=list(units))

    @classmethod
    def from_json(cls, raw: str) -> Data:
        """Parse a ``{"annotation": [...]}`` JSON document."""
        return cls.model_validate_json(raw)

    def to_json(self) -> str:
        """Serialize the document the way the ``data`` form field expects it."""
        payload = {
            "annotation": [
                unit.model_dump(by_alias=True, exclude_none=True) for unit in self.annotation
            ]
        }
        return json.dumps(payload, ensure_ascii=False)

    @property
    def text(self) -> str:
        """Effective text of the document.

        Raises:
            InvalidDataAnnotationError: If any unit holds neither text nor markup
        """
        return "".join(unit.try_get_text() for unit in self.annotation)
