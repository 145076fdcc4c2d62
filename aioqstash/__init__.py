"""Asyncio client for the QStash messaging and scheduling API."""

from __future__ import annotations

import logging

from aiohttp import ClientSession
from yarl import URL

from .const import (
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_STREAM_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from .dlq import DeadLetterQueueApi
from .errors import (
    QStashApiError,
    QStashBurstRateLimitError,
    QStashChatRateLimitError,
    QStashDailyRateLimitError,
    QStashInvalidApiKeyError,
    QStashInvalidBaseUrlError,
    QStashInvalidRequestUrlError,
    QStashRateLimitError,
    QStashRequestError,
    QStashResponseParseError,
    QStashStreamParseError,
    QStashTimeoutError,
    QStashUnspecifiedRateLimitError,
)
from .events import EventsApi, EventState
from .exceptions import QStashError
from .llm import LLMApi, delta_content
from .messages import MessagesApi
from .queues import QueuesApi
from .schedules import SchedulesApi
from .signing_keys import SigningKeysApi
from .stream import StreamSession
from .url_groups import UrlGroupsApi

__all__ = [
    "EventState",
    "QStash",
    "QStashApiError",
    "QStashBurstRateLimitError",
    "QStashChatRateLimitError",
    "QStashDailyRateLimitError",
    "QStashError",
    "QStashInvalidApiKeyError",
    "QStashInvalidBaseUrlError",
    "QStashInvalidRequestUrlError",
    "QStashRateLimitError",
    "QStashRequestError",
    "QStashResponseParseError",
    "QStashStreamParseError",
    "QStashTimeoutError",
    "QStashUnspecifiedRateLimitError",
    "StreamSession",
    "delta_content",
]

_LOGGER = logging.getLogger(__name__)


def _validate_token(token: str) -> str:
    """Return the token if it can be sent as a bearer credential."""
    if not token or not token.strip():
        raise QStashInvalidApiKeyError("Invalid API key: token is empty")
    if any(char in token for char in "\r\n"):
        raise QStashInvalidApiKeyError("Invalid API key: token contains a line break")
    try:
        token.encode("latin-1")
    except UnicodeEncodeError as err:
        raise QStashInvalidApiKeyError(
            "Invalid API key: token contains unsupported characters",
            orig_exc=err,
        ) from err
    return token


def _validate_base_url(base_url: str) -> str:
    """Return the base URL without trailing slash."""
    try:
        url = URL(base_url)
    except (TypeError, ValueError) as err:
        raise QStashInvalidBaseUrlError(
            f"Invalid base URL: {base_url}",
            orig_exc=err,
        ) from err
    if not url.is_absolute() or url.scheme not in ("http", "https") or not url.host:
        raise QStashInvalidBaseUrlError(f"Invalid base URL: {base_url}")
    if url.query_string or url.fragment:
        raise QStashInvalidBaseUrlError(f"Invalid base URL: {base_url}")
    return str(url).rstrip("/")


class QStash:
    """Store the configuration of the QStash connection."""

    def __init__(
        self,
        websession: ClientSession,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        stream_read_timeout: float = DEFAULT_STREAM_READ_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Create an instance of QStash."""
        self.websession = websession
        self._token = _validate_token(token)
        self.base_url = _validate_base_url(base_url)
        self.request_timeout = request_timeout
        self.stream_read_timeout = stream_read_timeout
        self.user_agent = user_agent

        self.messages = MessagesApi(self)
        self.queues = QueuesApi(self)
        self.schedules = SchedulesApi(self)
        self.url_groups = UrlGroupsApi(self)
        self.dlq = DeadLetterQueueApi(self)
        self.events = EventsApi(self)
        self.signing_keys = SigningKeysApi(self)
        self.llm = LLMApi(self)

        _LOGGER.debug("QStash client configured for %s", self.base_url)

    @property
    def token(self) -> str:
        """Return the API token."""
        return self._token
