"""Custom exception hierarchy."""

from __future__ import annotations


class PagingError(Exception):
    """Base exception for all library errors."""

    pass


class InvalidArgumentError(PagingError, ValueError):
    """A required argument was missing or blank.

    Raised synchronously, before any request is sent.
    """

    pass


class TransportError(PagingError):
    """A page request failed at the HTTP layer."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class RateLimitError(TransportError):
    """Server answered 429."""

    def __init__(self, message: str, retry_after: int = 60, url: str | None = None) -> None:
        super().__init__(message, status_code=429, url=url)
        self.retry_after = retry_after


class ParseError(PagingError):
    """Page content could not be parsed as JSON."""

    pass
