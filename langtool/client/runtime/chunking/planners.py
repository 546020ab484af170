"""Fragment planning logic for splitting long requests.

This module provides the split functions and the FragmentPlanner class that
turn one request into several requests whose text respects the server's
length limit.

Both splitters guarantee that the concatenation of the produced fragments
reproduces the input exactly. Fragments are only cut right after an
occurrence of the split pattern, so the size limit is a target: a single
pattern-delimited segment longer than the limit stays whole unless the
policy disallows oversized fragments.
"""

from __future__ import annotations

import unicodedata

from ...core.exceptions import InvalidRequestError
from ...models import CheckRequest, Data
from .definitions import SplitPolicy
from .telemetry import log_fragment_plan


def _segment_bounds(text: str, pattern: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` of every segment, each ending with ``pattern``.

    The last segment may lack the pattern. No empty segment is produced.
    """
    bounds: list[tuple[int, int]] = []
    start = 0
    while True:
        idx = text.find(pattern, start)
        if idx == -1:
            break
        end = idx + len(pattern)
        bounds.append((start, end))
        start = end
    if start < len(text):
        bounds.append((start, len(text)))
    return bounds


def _is_safe_cut(text: str, index: int) -> bool:
    # never separate a combining mark from its base, nor CR from LF
    if index <= 0 or index >= len(text):
        return True
    if text[index - 1] == "\r" and text[index] == "\n":
        return False
    return not unicodedata.combining(text[index])


def _cut_position(text: str, start: int, end: int, max_length: int) -> int:
    """Return where to cut the segment ``text[start:end]`` to respect ``max_length``.

    The cut goes right after the last whitespace of the window when there is
    one, else at the last safe position. A window without any safe position
    (a base character followed by many combining marks) is extended up to the
    next safe one.
    """
    limit = start + max_length
    for i in range(limit, start, -1):
        if text[i - 1].isspace() and _is_safe_cut(text, i):
            return i
    for i in range(limit, start, -1):
        if _is_safe_cut(text, i):
            return i
    i = limit + 1
    while i < end and not _is_safe_cut(text, i):
        i += 1
    return i


def _cap_bounds(
    text: str, bounds: list[tuple[int, int]], max_length: int
) -> list[tuple[int, int]]:
    capped: list[tuple[int, int]] = []
    for start, end in bounds:
        while end - start > max_length:
            cut = _cut_position(text, start, end, max_length)
            if cut >= end:
                break
            capped.append((start, cut))
            start = cut
        capped.append((start, end))
    return capped


def split_text(
    text: str,
    max_length: int,
    pattern: str,
    allow_oversize: bool = True,
) -> list[str]:
    """Split text into as few fragments as possible of less than ``max_length`` chars.

    Consecutive pattern-delimited segments are merged greedily while the
    fragment stays shorter than ``max_length``.

    Examples:
        >>> s = "I have so many friends.\\nThey are very funny.\\n"
        >>> split_text(s, 40, "\\n")
        ['I have so many friends.\\n', 'They are very funny.\\n']
        >>> split_text(s, 80, "\\n")
        ['I have so many friends.\\nThey are very funny.\\n']
        >>> split_text("", 100, "\\n")
        []

    Args:
        text: Text to split
        max_length: Target maximum fragment length
        pattern: Fragments are cut right after occurrences of this string
        allow_oversize: If False, segments longer than ``max_length`` are cut
            into pieces of at most ``max_length`` chars, preferably after
            whitespace and never inside a CRLF pair or before a combining mark

    Returns:
        Ordered list of fragments whose concatenation equals ``text``
    """
    if max_length <= 0:
        raise ValueError("max_length must be positive")
    if not pattern:
        raise ValueError("pattern must not be empty")

    bounds = _segment_bounds(text, pattern)
    if not bounds:
        return []
    if not allow_oversize:
        bounds = _cap_bounds(text, bounds, max_length)

    fragments: list[str] = []
    frag_start, frag_end = bounds[0]
    for start, end in bounds[1:]:
        if (frag_end - frag_start) + (end - start) < max_length:
            frag_end = end
        else:
            fragments.append(text[frag_start:frag_end])
            frag_start, frag_end = start, end
    fragments.append(text[frag_start:frag_end])

    return fragments


def split_data(data: Data, max_length: int, pattern: str) -> list[Data]:
    """Split an annotated document without ever dividing an annotation unit.

    Candidate cut points are the text units containing ``pattern``. Walking
    them in order, a cut is made after a candidate as soon as extending the
    current fragment up to the next candidate (or the end of the document)
    would exceed ``max_length`` characters of text plus markup.

    With fewer than two candidates the document is returned whole, so callers
    needing smaller fragments must pick a pattern that occurs often enough.

    Args:
        data: Annotated document to split
        max_length: Target maximum fragment length (text + markup chars)
        pattern: Pattern whose presence in a text unit makes it a cut point

    Returns:
        Ordered list of documents whose units, concatenated, equal ``data``'s
    """
    if max_length <= 0:
        raise ValueError("max_length must be positive")
    if not pattern:
        raise ValueError("pattern must not be empty")

    units = data.annotation
    if not units:
        return []

    # (unit index, length of text + markup up to and including that unit)
    candidates: list[tuple[int, int]] = []
    total = 0
    for i, unit in enumerate(units):
        total += unit.char_length
        if unit.text is not None and pattern in unit.text:
            candidates.append((i, total))

    if len(candidates) < 2:
        return [data]

    cuts: list[int] = []
    base = 0
    next_lengths = [length for _, length in candidates[1:]] + [total]
    for (index, length), next_length in zip(candidates, next_lengths):
        if index == len(units) - 1:
            break
        if next_length - base > max_length:
            cuts.append(index)
            base = length

    fragments: list[Data] = []
    start = 0
    for cut in cuts:
        fragments.append(Data(annotation=units[start : cut + 1]))
        start = cut + 1
    if start < len(units):
        fragments.append(Data(annotation=units[start:]))

    return fragments


class FragmentPlanner:
    """Plans the fragments of a check request.

    The planner takes a request carrying text or an annotated document and
    a split policy, then produces one request per fragment. Every produced
    request keeps the options (language, rules, dictionaries...) of the
    original one.
    """

    def __init__(self, policy: SplitPolicy | None = None) -> None:
        """Initialize fragment planner.

        Args:
            policy: Split policy (defaults to 1500 chars on blank lines)
        """
        self._policy = policy or SplitPolicy()

    @property
    def policy(self) -> SplitPolicy:
        return self._policy

    def plan(self, request: CheckRequest) -> list[CheckRequest]:
        """Split a request into per-fragment requests.

        Args:
            request: Request to split

        Returns:
            Requests in document order; empty if the request has no content

        Raises:
            InvalidRequestError: If the request has neither text nor data
        """
        policy = self._policy

        if request.data is not None:
            documents = split_data(request.data, policy.max_length, policy.pattern)
            plans = [request.with_data(d) for d in documents]
            total_length = sum(unit.char_length for unit in request.data.annotation)
            annotated = True
        elif request.text is not None:
            texts = split_text(
                request.text,
                policy.max_length,
                policy.pattern,
                allow_oversize=policy.allow_oversize,
            )
            plans = [request.with_text(t) for t in texts]
            total_length = len(request.text)
            annotated = False
        else:
            raise InvalidRequestError("missing text or data field")

        log_fragment_plan(
            total_fragments=len(plans),
            total_length=total_length,
            max_length=policy.max_length,
            pattern=policy.pattern,
            annotated=annotated,
        )

        return plans
