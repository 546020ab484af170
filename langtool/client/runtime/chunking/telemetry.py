"""Structured logging for splitting and dispatch.

This module provides telemetry hooks for split requests, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging

from .definitions import DispatchResult

logger = logging.getLogger(__name__)


def log_fragment_plan(
    *,
    total_fragments: int,
    total_length: int,
    max_length: int,
    pattern: str,
    annotated: bool = False,
) -> None:
    """Log split plan creation.

    Args:
        total_fragments: Number of fragments planned
        total_length: Characters in the original request
        max_length: Target fragment size
        pattern: Split pattern
        annotated: Whether the request carried an annotated document
    """
    logger.info(
        "fragment_plan_created",
        extra={
            "total_fragments": total_fragments,
            "total_length": total_length,
            "max_length": max_length,
            "pattern": pattern,
            "annotated": annotated,
        },
    )


def log_fragment_completed(
    *,
    fragment_index: int,
    matches: int,
    attempts: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single fragment.

    Args:
        fragment_index: Zero-based index of the fragment
        matches: Number of matches returned for the fragment
        attempts: Requests sent for the fragment, retries included
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "fragment_completed",
        extra={
            "fragment_index": fragment_index,
            "matches": matches,
            "attempts": attempts,
            "latency_ms": latency_ms,
        },
    )


def log_fragment_retry(
    *,
    fragment_index: int,
    attempt: int,
    error_message: str,
) -> None:
    """Log a retried fragment."""
    logger.warning(
        "fragment_retry",
        extra={
            "fragment_index": fragment_index,
            "attempt": attempt,
            "error_message": error_message,
        },
    )


def log_fragment_error(
    *,
    fragment_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log fragment error.

    Args:
        fragment_index: Zero-based index of the fragment that failed
        error_type: Type of error (e.g., "ServerError", "ClientConnectorError")
        error_message: Error message
    """
    logger.error(
        "fragment_error",
        extra={
            "fragment_index": fragment_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_dispatch_complete(
    *,
    mode: str,
    result: DispatchResult,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a dispatch.

    Args:
        mode: Dispatch mode used
        result: DispatchResult of the dispatch
        total_latency_ms: Wall clock latency in milliseconds (optional)
    """
    logger.info(
        "dispatch_complete",
        extra={
            "mode": mode,
            "fragments_used": result.fragments_used,
            "attempts": result.attempts,
            "total_matches": result.total_matches,
            "total_latency_ms": total_latency_ms,
        },
    )
