"""REST runtime abstractions."""

from .http_client import HTTPClient
from .runner import ModelAdapter, ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import RESTTransport

__all__ = [
    "HTTPClient",
    "RESTTransport",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "ModelAdapter",
]
