"""Manage events API."""

from __future__ import annotations

import base64
import binascii
from enum import StrEnum
import logging
from typing import NotRequired, TypedDict, Unpack

import voluptuous as vol

from .api import ApiBase

_LOGGER = logging.getLogger(__name__)


class EventState(StrEnum):
    """State of a message at the time of an event."""

    CREATED = "CREATED"
    ACTIVE = "ACTIVE"
    RETRY = "RETRY"
    ERROR = "ERROR"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"
    CANCEL_REQUESTED = "CANCEL_REQUESTED"
    CANCELLED = "CANCELLED"


class EventsFilter(TypedDict, total=False):
    """Filters for listing events."""

    cursor: str
    message_id: str
    state: EventState | str
    url: str
    topic_name: str
    schedule_id: str
    queue_name: str
    from_date: int
    to_date: int
    count: int
    order: str


class Event(TypedDict):
    """A log entry of a message."""

    time: int
    messageId: str
    header: dict[str, list[str]]
    body: bytes
    state: EventState | str
    error: NotRequired[str]
    nextDeliveryTime: NotRequired[int]
    url: NotRequired[str]
    topicName: NotRequired[str]
    endpointName: NotRequired[str]
    scheduleId: NotRequired[str]
    queueName: NotRequired[str]


class EventsResponse(TypedDict):
    """A page of events."""

    cursor: NotRequired[str]
    events: list[Event]


_QUERY_KEYS: dict[str, str] = {
    "cursor": "cursor",
    "message_id": "messageId",
    "state": "state",
    "url": "url",
    "topic_name": "topicName",
    "schedule_id": "scheduleId",
    "queue_name": "queueName",
    "from_date": "fromDate",
    "to_date": "toDate",
    "count": "count",
    "order": "order",
}


def decode_body(value: str) -> bytes:
    """Decode a base64 encoded message body."""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as err:
        raise vol.Invalid(f"invalid base64 body: {err}") from err


EVENT_SCHEMA = vol.Schema(
    {
        vol.Required("time"): int,
        vol.Required("messageId"): str,
        vol.Optional("header", default=dict): {str: [str]},
        vol.Optional("body", default=""): vol.All(str, decode_body),
        vol.Required("state"): vol.Any(vol.Coerce(EventState), str),
        vol.Optional("error"): str,
        vol.Optional("nextDeliveryTime"): int,
        vol.Optional("url"): str,
        vol.Optional("topicName"): str,
        vol.Optional("endpointName"): str,
        vol.Optional("scheduleId"): str,
        vol.Optional("queueName"): str,
    },
    extra=vol.ALLOW_EXTRA,
)

EVENTS_RESPONSE_SCHEMA = vol.Schema(
    {
        vol.Optional("cursor"): vol.Any(str, None),
        vol.Optional("events", default=list): [EVENT_SCHEMA],
    },
    extra=vol.ALLOW_EXTRA,
)


def events_query_params(**filters: Unpack[EventsFilter]) -> dict[str, str]:
    """Return the query parameters for the given filters."""
    params: dict[str, str] = {}
    for key, value in filters.items():
        if value is None:
            continue
        if key not in _QUERY_KEYS:
            raise TypeError(f"Unknown events filter: {key}")
        params[_QUERY_KEYS[key]] = str(value)
    return params


class EventsApi(ApiBase):
    """Class to help communicate with the events API."""

    async def list(self, **filters: Unpack[EventsFilter]) -> EventsResponse:
        """List events, newest first unless another order is requested."""
        response: EventsResponse = await self._call_api(
            path="/v2/events",
            params=events_query_params(**filters),
            schema=EVENTS_RESPONSE_SCHEMA,
        )
        return response
