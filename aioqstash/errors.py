"""QStash API error hierarchy.

Kept in a separate module to avoid import cycles between the transport, the
rate limit classification and the stream session.
"""

from __future__ import annotations

import datetime as dt

from .exceptions import QStashError
from .utils import utc_from_timestamp


class QStashApiError(QStashError):
    """Exception raised when handling the QStash API."""

    def __init__(
        self,
        context: str | Exception,
        *,
        orig_exc: Exception | None = None,
        reason: str | None = None,
        status: int | None = None,
    ) -> None:
        """Initialize."""
        super().__init__(context)
        self.orig_exc = orig_exc
        self.reason = reason
        self.status = status


class QStashInvalidApiKeyError(QStashApiError):
    """Exception raised when the API token is not usable."""


class QStashInvalidBaseUrlError(QStashApiError):
    """Exception raised when the configured base URL is not valid."""


class QStashInvalidRequestUrlError(QStashApiError):
    """Exception raised when a request URL can not be built."""


class QStashRequestError(QStashApiError):
    """Exception raised when a request fails."""


class QStashTimeoutError(QStashRequestError):
    """Exception raised when a request times out."""


class QStashResponseParseError(QStashApiError):
    """Exception raised when a response body can not be parsed."""


class QStashStreamParseError(QStashApiError):
    """Exception raised when a streamed event can not be parsed."""


class QStashRateLimitError(QStashApiError):
    """Base exception for rate limited requests."""

    def __init__(self, context: str) -> None:
        """Initialize."""
        super().__init__(context, status=429)


class QStashDailyRateLimitError(QStashRateLimitError):
    """Exception raised when the daily request quota is used up."""

    def __init__(self, *, reset: int) -> None:
        """Initialize."""
        super().__init__(f"Daily rate limit exceeded. Retry after: {reset}")
        self.reset = reset

    @property
    def reset_at(self) -> dt.datetime:
        """Return the reset time as a UTC datetime."""
        return utc_from_timestamp(self.reset)


class QStashBurstRateLimitError(QStashRateLimitError):
    """Exception raised when too many requests were sent in a short burst."""

    def __init__(self, *, reset: int) -> None:
        """Initialize."""
        super().__init__(f"Burst rate limit exceeded. Retry after: {reset}")
        self.reset = reset

    @property
    def reset_at(self) -> dt.datetime:
        """Return the reset time as a UTC datetime."""
        return utc_from_timestamp(self.reset)


class QStashChatRateLimitError(QStashRateLimitError):
    """Exception raised when the LLM request or token quota is used up."""

    def __init__(self, *, reset_requests: int, reset_tokens: int) -> None:
        """Initialize."""
        super().__init__(
            "Chat rate limit exceeded. Retry after requests reset: "
            f"{reset_requests}, tokens reset: {reset_tokens}"
        )
        self.reset_requests = reset_requests
        self.reset_tokens = reset_tokens


class QStashUnspecifiedRateLimitError(QStashRateLimitError):
    """Exception raised when a request is rate limited without details."""

    def __init__(self) -> None:
        """Initialize."""
        super().__init__("Rate limit exceeded, but no details provided")


__all__ = [
    "QStashApiError",
    "QStashBurstRateLimitError",
    "QStashChatRateLimitError",
    "QStashDailyRateLimitError",
    "QStashInvalidApiKeyError",
    "QStashInvalidBaseUrlError",
    "QStashInvalidRequestUrlError",
    "QStashRateLimitError",
    "QStashRequestError",
    "QStashResponseParseError",
    "QStashStreamParseError",
    "QStashTimeoutError",
    "QStashUnspecifiedRateLimitError",
]
