"""Runtime components: HTTP transport and request splitting."""

from .chunking import (
    DispatchPolicy,
    DispatchResult,
    FragmentExecutor,
    FragmentPlanner,
    RetryPolicy,
    SplitPolicy,
    join_responses,
)
from .rest import HTTPClient, RESTTransport, RestRunner

__all__ = [
    "HTTPClient",
    "RESTTransport",
    "RestRunner",
    "SplitPolicy",
    "RetryPolicy",
    "DispatchPolicy",
    "DispatchResult",
    "FragmentPlanner",
    "FragmentExecutor",
    "join_responses",
]
