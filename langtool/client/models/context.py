"""Check responses bound to the text they were computed against.

Architecture:
    A response on its own only knows offsets. Joining the responses of a
    split request and turning offsets into line/column positions both need
    the exact text that was checked, so the two travel together in
    ResponseWithContext.

Design Decisions:
    - append() is order dependent: the right operand's offsets (and sentence
      ranges) are shifted by the left operand's text length
    - Lengths are counted in code points, the unit LanguageTool offsets use
      for text without astral characters
    - Position mapping is a single forward scan returning a materialized
      list; offsets going backwards or past the end of the text are caller
      bugs and raise PositionMappingError
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.exceptions import PositionMappingError
from .response import CheckResponse, Match, Warnings


def match_positions(
    text: str,
    matches: Sequence[Match],
    line_number: int = 1,
) -> list[tuple[int, int, Match]]:
    """Compute the line number and line offset of every match.

    Matches must be ordered by non-decreasing offset. Lines are 1-based
    (starting at ``line_number``), line offsets are 0-based.

    Args:
        text: Text the match offsets refer to
        matches: Matches sorted by offset
        line_number: Number of the first line of ``text``

    Returns:
        List of ``(line_number, line_offset, match)`` in input order

    Raises:
        PositionMappingError: If a match offset lies beyond the end of
            ``text`` or is smaller than the previous one
    """
    positions: list[tuple[int, int, Match]] = []
    chars = iter(text)
    cursor = 0
    line_offset = 0

    for m in matches:
        if m.offset < cursor:
            raise PositionMappingError(
                f"match offsets must not decrease (got {m.offset} after {cursor})"
            )
        for _ in range(m.offset - cursor):
            c = next(chars, None)
            if c is None:
                raise PositionMappingError(
                    "text is shorter than expected, are you sure this text was the one "
                    "used for the check request?"
                )
            if c == "\n":
                line_number += 1
                line_offset = 0
            else:
                line_offset += 1
        cursor = m.offset
        positions.append((line_number, line_offset, m))

    return positions


def _join_warnings(left: Warnings | None, right: Warnings | None) -> Warnings | None:
    if left is None:
        return right
    if right is None:
        return left
    return Warnings(incomplete_results=left.incomplete_results or right.incomplete_results)


@dataclass
class ResponseWithContext:
    """Check response paired with the text it was computed against.

    Attributes:
        text: Original text sent to the server (effective text for data)
        response: Check response for that text
        text_length: Number of characters in ``text``
    """

    text: str
    response: CheckResponse
    text_length: int = field(init=False)

    def __post_init__(self) -> None:
        self.text_length = len(self.text)

    @property
    def matches(self) -> list[Match]:
        return self.response.matches

    def append(self, other: ResponseWithContext) -> ResponseWithContext:
        """Join ``other`` after this response.

        Offsets of ``other``'s matches and sentence ranges are shifted by
        this response's text length; matches of ``self`` are left untouched.
        Neither operand is modified.
        """
        offset = self.text_length

        matches = list(self.response.matches)
        matches.extend(m.shifted(offset) for m in other.response.matches)

        sentence_ranges = self.response.sentence_ranges
        if other.response.sentence_ranges is not None:
            shifted = [(start + offset, end + offset) for start, end in other.response.sentence_ranges]
            sentence_ranges = (sentence_ranges or []) + shifted

        response = self.response.model_copy(
            update={
                "matches": matches,
                "sentence_ranges": sentence_ranges,
                "warnings": _join_warnings(self.response.warnings, other.response.warnings),
            }
        )

        return ResponseWithContext(self.text + other.text, response)

    def iter_match_positions(self, line_number: int = 1) -> list[tuple[int, int, Match]]:
        """Return ``(line_number, line_offset, match)`` for every match."""
        return match_positions(self.text, self.response.matches, line_number=line_number)

    def into_response(self, line_number: int = 1) -> CheckResponse:
        """Return the response with ``more_context`` set on every match."""
        matches = [
            m.with_position(lineno, lineof)
            for lineno, lineof, m in self.iter_match_positions(line_number=line_number)
        ]
        return self.response.model_copy(update={"matches": matches})
