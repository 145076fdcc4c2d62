"""Helper methods for aioqstash."""

from __future__ import annotations

import datetime as dt
from urllib.parse import quote

import pytz

UTC = pytz.utc


def utc_from_timestamp(timestamp: float) -> dt.datetime:
    """Return a UTC time from a timestamp."""
    return dt.datetime.fromtimestamp(timestamp, UTC)


def parse_reset(value: str | None) -> int:
    """Parse a rate limit reset header value.

    Missing values, anything but plain ASCII digits and values that do not
    fit an unsigned 64 bit integer are reported as 0.
    """
    if value is None or not (value.isascii() and value.isdigit()):
        return 0
    reset = int(value)
    return reset if reset < 2**64 else 0


def quote_segment(value: str) -> str:
    """Percent-encode a value so it is a single path segment."""
    return quote(value, safe="")
