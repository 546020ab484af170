"""Splitting and dispatch policy structures.

This module defines the data structures used to describe how a long request
is split into fragments and how those fragments are sent to the server.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ...core.enums import DispatchMode
from ...core.exceptions import is_transient_overload
from ...models import ResponseWithContext

DEFAULT_MAX_LENGTH = 1500
DEFAULT_SPLIT_PATTERN = "\n\n"


@dataclass(frozen=True)
class SplitPolicy:
    """How a request is split into fragments.

    Attributes:
        max_length: Target maximum number of characters per fragment
        pattern: Fragments are only cut right after occurrences of this string
        allow_oversize: Keep a single segment longer than max_length whole
            (True) or cut it into pieces of at most max_length chars (False),
            keeping CRLF pairs and combining marks with their base. Has no
            effect on annotated documents, whose units are never divided.
    """

    max_length: int = DEFAULT_MAX_LENGTH
    pattern: str = DEFAULT_SPLIT_PATTERN
    allow_oversize: bool = True

    def __post_init__(self) -> None:
        if self.max_length <= 0:
            raise ValueError("SplitPolicy max_length must be positive")
        if not self.pattern:
            raise ValueError("SplitPolicy pattern must not be empty")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry policy for a single fragment.

    Examples:
        # Retry overloaded-server errors forever
        RetryPolicy()

        # At most 5 attempts, half a second apart
        RetryPolicy(max_attempts=5, delay=0.5)

    Attributes:
        max_attempts: Total attempts per fragment (None = unbounded)
        delay: Seconds to wait between attempts
        predicate: Decides whether an error is worth another attempt
    """

    max_attempts: int | None = None
    delay: float = 0.0
    predicate: Callable[[BaseException], bool] = is_transient_overload

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("RetryPolicy max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("RetryPolicy delay cannot be negative")

    def should_retry(self, exc: BaseException, attempt: int) -> bool:
        """Return True if ``exc`` raised by attempt number ``attempt`` is retried."""
        if self.max_attempts is not None and attempt >= self.max_attempts:
            return False
        return self.predicate(exc)


@dataclass(frozen=True)
class DispatchPolicy:
    """How fragments are sent to the server.

    Attributes:
        mode: Sequential or concurrent dispatch
        max_concurrency: Cap on in-flight requests in concurrent mode (None = all)
        retry: Optional retry policy; without it every error is final
    """

    mode: DispatchMode = DispatchMode.CONCURRENT
    max_concurrency: int | None = None
    retry: RetryPolicy | None = None

    def __post_init__(self) -> None:
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValueError("DispatchPolicy max_concurrency must be at least 1")


@dataclass(frozen=True)
class FragmentPlan:
    """Position of one fragment within a split request.

    Attributes:
        fragment_index: Zero-based index of the fragment in document order
        fragment_count: Total number of fragments of the request
        length: Number of characters of the fragment (effective text for data)
    """

    fragment_index: int
    fragment_count: int
    length: int


@dataclass
class DispatchResult:
    """Result of one dispatch.

    Attributes:
        responses: Per fragment responses bound to their text, in fragment order
        fragments_used: Number of fragments checked
        attempts: Total requests sent, retries included
        total_matches: Number of matches across all fragments
        latencies_ms: Per fragment latency, in fragment order
    """

    responses: list[ResponseWithContext] = field(default_factory=list)
    fragments_used: int = 0
    attempts: int = 0
    total_matches: int = 0
    latencies_ms: list[float] = field(default_factory=list)
