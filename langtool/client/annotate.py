"""Human readable rendering of check responses.

Each match becomes a compiler style snippet::

    error[MORFOLOGIK_RULE_EN_US]: Possible spelling mistake found.
     --> notes.txt:1:20
      |
    1 | Some phrase with a smal mistake.
      |                    ^^^^ Possible Typo
      |                    help: small, seal, sea
"""

from __future__ import annotations

from .models import CheckResponse, Match, match_positions

NO_ERRORS_MESSAGE = "No errors were found in provided text"


def _snippet(match: Match, line_number: int, line_offset: int, line: str, origin: str) -> str:
    width = len(str(line_number))
    gutter = " " * (width + 1)
    pad = " " * line_offset
    underline = "^" * max(1, min(match.length, len(line) - line_offset))

    parts = [
        f"error[{match.rule.id}]: {match.message}",
        f"{gutter[:-1]}--> {origin}:{line_number}:{line_offset + 1}",
        f"{gutter}|",
        f"{line_number} | {line}",
        f"{gutter}| {pad}{underline} {match.rule.description}",
    ]
    if match.replacements:
        suggestions = ", ".join(r.value for r in match.replacements)
        parts.append(f"{gutter}| {pad}help: {suggestions}")
    return "\n".join(parts)


def annotate(response: CheckResponse, text: str, origin: str | None = None) -> str:
    """Render every match of ``response`` against the text that was checked.

    Args:
        response: Check response whose offsets refer to ``text``
        text: Checked text (whole document for joined responses)
        origin: Name shown in front of positions, e.g. a file name

    Returns:
        Snippets separated by blank lines, or a notice when nothing was found

    Raises:
        PositionMappingError: If ``text`` does not match the offsets
    """
    if not response.matches:
        return NO_ERRORS_MESSAGE

    # CRLF line ends are displayed without the CR
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    origin = origin or "<text>"
    snippets = [
        _snippet(m, lineno, lineof, lines[lineno - 1], origin)
        for lineno, lineof, m in match_positions(text, response.matches)
    ]
    return "\n\n".join(snippets) + "\n"
