"""Unit tests for personal dictionary models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from langtool.client.core import InvalidValueError
from langtool.client.models import LoginArgs, WordsAddRequest, WordsDeleteRequest, WordsRequest

LOGIN = LoginArgs(username="me@example.com", api_key="secret")


class TestWordsModels:
    """Test words request serialization."""

    def test_list_params(self):
        """Test list requests become query parameters."""
        request = WordsRequest(login=LOGIN, offset=10, limit=20, dicts=["a", "b"])
        assert request.to_params() == {
            "username": "me@example.com",
            "apiKey": "secret",
            "offset": "10",
            "limit": "20",
            "dicts": "a,b",
        }

    def test_list_params_minimal(self):
        """Test optional parameters are omitted."""
        assert WordsRequest(login=LOGIN).to_params() == {
            "username": "me@example.com",
            "apiKey": "secret",
        }

    def test_add_form(self):
        """Test add requests become form bodies with the dict field."""
        request = WordsAddRequest(word="colour", login=LOGIN, dictionary="british")
        assert request.to_form() == {
            "word": "colour",
            "username": "me@example.com",
            "apiKey": "secret",
            "dict": "british",
        }

    def test_delete_form_without_dict(self):
        """Test the dict field is optional."""
        form = WordsDeleteRequest(word="colour", login=LOGIN).to_form()
        assert "dict" not in form

    def test_word_with_whitespace_rejected(self):
        """Test words cannot contain whitespace."""
        with pytest.raises(InvalidValueError):
            WordsAddRequest(word="two words", login=LOGIN)

    def test_login_requires_values(self):
        """Test empty credentials are rejected."""
        with pytest.raises(ValidationError):
            LoginArgs(username="", api_key="x")
