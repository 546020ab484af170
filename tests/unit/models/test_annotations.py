"""Unit tests for the annotated document model."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from langtool.client.core import InvalidDataAnnotationError
from langtool.client.models import Data, DataAnnotation


class TestDataAnnotation:
    """Test DataAnnotation constructors and validation."""

    def test_text(self):
        """Test text unit."""
        unit = DataAnnotation.new_text("Hello")
        assert unit.text == "Hello"
        assert unit.markup is None
        assert unit.interpret_as is None
        assert unit.is_text

    def test_markup(self):
        """Test markup unit."""
        unit = DataAnnotation.new_markup("<a>Hello</a>")
        assert unit.text is None
        assert unit.markup == "<a>Hello</a>"
        assert unit.interpret_as is None
        assert not unit.is_text

    def test_interpreted_markup(self):
        """Test markup unit with interpretation."""
        unit = DataAnnotation.new_interpreted_markup("<a>Hello</a>", "Hello")
        assert unit.markup == "<a>Hello</a>"
        assert unit.interpret_as == "Hello"

    def test_text_and_markup_rejected(self):
        """Test a unit cannot be both text and markup."""
        with pytest.raises(ValidationError):
            DataAnnotation(text="a", markup="<b>")

    def test_interpret_as_requires_markup(self):
        """Test interpret_as is only valid with markup."""
        with pytest.raises(ValidationError):
            DataAnnotation(text="a", interpret_as="b")

    def test_empty_unit_rejected(self):
        """Test a unit must hold text or markup."""
        with pytest.raises(ValidationError):
            DataAnnotation()
        with pytest.raises(ValidationError):
            DataAnnotation(interpret_as="\n")

    def test_unvalidated_empty_unit_fails_on_use(self):
        """Test reading a unit built without validation raises."""
        unit = DataAnnotation.model_construct()
        with pytest.raises(InvalidDataAnnotationError):
            unit.try_get_text()

    def test_char_length(self):
        """Test char_length counts text or markup characters."""
        assert DataAnnotation.new_text("abc").char_length == 3
        assert DataAnnotation.new_interpreted_markup("<br/>", "\n").char_length == 5

    def test_frozen(self):
        """Test units are immutable."""
        unit = DataAnnotation.new_text("abc")
        with pytest.raises(ValidationError):
            unit.text = "def"


class TestData:
    """Test Data document helpers."""

    def test_effective_text(self):
        """Test the effective text concatenates text and markup."""
        data = Data.from_units(
            [
                DataAnnotation.new_text("A "),
                DataAnnotation.new_markup("<b>"),
                DataAnnotation.new_text("test"),
                DataAnnotation.new_markup("</b>"),
            ]
        )
        assert data.text == "A <b>test</b>"

    def test_from_json_rejects_empty_unit(self):
        """Test an empty unit in a JSON document is rejected when parsing."""
        with pytest.raises(ValidationError):
            Data.from_json('{"annotation": [{"text": "a"}, {}]}')

    def test_from_json(self):
        """Test parsing the JSON document format."""
        raw = '{"annotation": [{"text": "A "}, {"markup": "<p>", "interpretAs": "\\n\\n"}]}'
        data = Data.from_json(raw)
        assert data.annotation == [
            DataAnnotation.new_text("A "),
            DataAnnotation.new_interpreted_markup("<p>", "\n\n"),
        ]

    def test_to_json_uses_wire_names(self):
        """Test serialization uses camelCase and skips missing fields."""
        data = Data.from_units(
            [DataAnnotation.new_text("é"), DataAnnotation.new_interpreted_markup("<p>", "\n")]
        )
        payload = json.loads(data.to_json())
        assert payload == {"annotation": [{"text": "é"}, {"markup": "<p>", "interpretAs": "\n"}]}
        assert "é" in data.to_json()

    def test_json_round_trip(self):
        """Test to_json output is accepted by from_json."""
        data = Data.from_units([DataAnnotation.new_text("x"), DataAnnotation.new_markup("<i>")])
        assert Data.from_json(data.to_json()) == data
