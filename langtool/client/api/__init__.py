"""High-level API helpers."""

from .request_builder import CheckRequestBuilder, check_request

__all__ = ["CheckRequestBuilder", "check_request"]
