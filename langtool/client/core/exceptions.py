"""Custom exception hierarchy."""

from __future__ import annotations

OVERLOADED_MESSAGE = "Error: Server overloaded, please try again later"


class LanguageToolError(Exception):
    """Base exception for all library errors."""

    pass


class InvalidRequestError(LanguageToolError):
    """Request cannot be sent or split.

    Raised when a check request carries neither ``text`` nor ``data``.
    """

    pass


class InvalidDataAnnotationError(LanguageToolError):
    """Annotation unit with neither text nor markup."""

    pass


class InvalidValueError(LanguageToolError):
    """User supplied value failed validation (language code, port, word)."""

    pass


class EmptyMergeInputError(LanguageToolError):
    """Attempted to join zero partial responses."""

    pass


class ServerError(LanguageToolError):
    """Error answer from the LanguageTool server."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ServerOverloadedError(ServerError):
    """Server refused the request because it is overloaded.

    This is the only error considered transient by the default retry policy.
    """

    def __init__(self, message: str = OVERLOADED_MESSAGE, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code, body=OVERLOADED_MESSAGE)


class RateLimitError(ServerError):
    """Server rate limit exceeded."""

    def __init__(self, message: str, retry_after: float = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class FragmentCheckError(LanguageToolError):
    """Checking one fragment of a split request failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, fragment_index: int, fragment_count: int) -> None:
        super().__init__(message)
        self.fragment_index = fragment_index
        self.fragment_count = fragment_count


class PositionMappingError(LanguageToolError):
    """Text and match offsets do not belong together.

    Raised by the position mapper when the text is shorter than a match
    offset or when offsets go backwards. This is a caller bug, never retried.
    """

    pass


def is_transient_overload(exc: BaseException) -> bool:
    """Return True if ``exc`` reports a temporarily overloaded server."""
    if isinstance(exc, ServerOverloadedError):
        return True
    return isinstance(exc, ServerError) and exc.body == OVERLOADED_MESSAGE
