"""Splitting layer for long check requests.

This module provides the logic that cuts a request too long for the server
into fragments, checks the fragments and joins the partial responses back
into one response whose offsets refer to the original text.

Architecture:
    The splitting layer consists of:
    - definitions.py: Policy and bookkeeping structures (SplitPolicy, DispatchPolicy, DispatchResult)
    - planners.py: Fragment planning logic (split_text, split_data, FragmentPlanner)
    - executors.py: Fragment dispatch logic (sequential or concurrent, order preserving)
    - merging.py: Offset adjusting join of partial responses
    - telemetry.py: Structured logging

Usage:
    requests = FragmentPlanner(SplitPolicy(max_length=1500)).plan(request)
    result = await FragmentExecutor(DispatchPolicy()).execute(requests=requests, check=check)
    joined = join_responses(result.responses)
"""

from __future__ import annotations

from .definitions import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_SPLIT_PATTERN,
    DispatchPolicy,
    DispatchResult,
    FragmentPlan,
    RetryPolicy,
    SplitPolicy,
)
from .executors import FragmentExecutor
from .merging import join_responses
from .planners import FragmentPlanner, split_data, split_text

__all__ = [
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_SPLIT_PATTERN",
    "SplitPolicy",
    "RetryPolicy",
    "DispatchPolicy",
    "DispatchResult",
    "FragmentPlan",
    "FragmentPlanner",
    "FragmentExecutor",
    "join_responses",
    "split_data",
    "split_text",
]
