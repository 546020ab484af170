"""Joining of partial responses computed from consecutive fragments."""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce

from ...core.exceptions import EmptyMergeInputError
from ...models import ResponseWithContext


def join_responses(responses: Iterable[ResponseWithContext]) -> ResponseWithContext:
    """Left fold of ``ResponseWithContext.append`` over responses.

    Responses must be given in document order: ``[r0, r1, r2]`` yields
    ``r0.append(r1).append(r2)``. A single response is returned unchanged.

    Raises:
        EmptyMergeInputError: If ``responses`` is empty
    """
    items = list(responses)
    if not items:
        raise EmptyMergeInputError("no response; cannot join zero responses")
    return reduce(ResponseWithContext.append, items)
