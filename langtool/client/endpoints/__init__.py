"""REST endpoint specifications of the LanguageTool v2 API."""

from . import check, languages, words

__all__ = ["check", "languages", "words"]
