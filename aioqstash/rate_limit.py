"""Classify throttled QStash responses."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import TypeAlias

import attr
from multidict import CIMultiDict, CIMultiDictProxy

from .const import (
    HEADER_BURST_LIMIT,
    HEADER_BURST_RESET,
    HEADER_CHAT_LIMIT_REQUESTS,
    HEADER_CHAT_RESET_REQUESTS,
    HEADER_CHAT_RESET_TOKENS,
    HEADER_DAILY_LIMIT,
    HEADER_DAILY_RESET,
)
from .errors import (
    QStashBurstRateLimitError,
    QStashChatRateLimitError,
    QStashDailyRateLimitError,
    QStashRateLimitError,
    QStashUnspecifiedRateLimitError,
)
from .utils import parse_reset

_LOGGER = logging.getLogger(__name__)

Headers: TypeAlias = CIMultiDict[str] | CIMultiDictProxy[str]


@attr.s(frozen=True, slots=True)
class RateLimitFamily:
    """A group of headers identifying which quota was exceeded."""

    name = attr.ib(type=str)
    limit_header = attr.ib(type=str)
    build = attr.ib(type=Callable[..., QStashRateLimitError])

    def matches(self, headers: Headers) -> bool:
        """Return True if the response carries this header family."""
        return self.limit_header in headers


def _daily(headers: Headers) -> QStashRateLimitError:
    return QStashDailyRateLimitError(reset=parse_reset(headers.get(HEADER_DAILY_RESET)))


def _burst(headers: Headers) -> QStashRateLimitError:
    return QStashBurstRateLimitError(reset=parse_reset(headers.get(HEADER_BURST_RESET)))


def _chat(headers: Headers) -> QStashRateLimitError:
    return QStashChatRateLimitError(
        reset_requests=parse_reset(headers.get(HEADER_CHAT_RESET_REQUESTS)),
        reset_tokens=parse_reset(headers.get(HEADER_CHAT_RESET_TOKENS)),
    )


# Evaluated in order, the first family present wins.
RATE_LIMIT_FAMILIES: tuple[RateLimitFamily, ...] = (
    RateLimitFamily("daily", HEADER_DAILY_LIMIT, _daily),
    RateLimitFamily("burst", HEADER_BURST_LIMIT, _burst),
    RateLimitFamily("chat", HEADER_CHAT_LIMIT_REQUESTS, _chat),
)


def classify_rate_limit(headers: Mapping[str, str]) -> QStashRateLimitError:
    """Return the rate limit error matching the response headers."""
    if not isinstance(headers, (CIMultiDict, CIMultiDictProxy)):
        headers = CIMultiDict(headers)

    for family in RATE_LIMIT_FAMILIES:
        if family.matches(headers):
            _LOGGER.debug("Request throttled by the %s rate limit", family.name)
            return family.build(headers)

    _LOGGER.debug("Request throttled without rate limit details")
    return QStashUnspecifiedRateLimitError()
