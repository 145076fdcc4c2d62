"""Test the events API."""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

import pytest

from aioqstash import EventState
from aioqstash.errors import QStashResponseParseError
from aioqstash.events import events_query_params

from .common import api_url

if TYPE_CHECKING:
    from aioqstash import QStash

    from .utils.aiohttp import AiohttpClientMocker


def _event(**kwargs) -> dict:
    return {
        "time": 1700000000000,
        "messageId": "msg_1",
        "state": "DELIVERED",
        **kwargs,
    }


def test_events_query_params() -> None:
    """Test filters are mapped to query parameters."""
    assert events_query_params(
        message_id="msg_1",
        state=EventState.FAILED,
        from_date=1,
        to_date=2,
        count=10,
        cursor=None,
    ) == {
        "messageId": "msg_1",
        "state": "FAILED",
        "fromDate": "1",
        "toDate": "2",
        "count": "10",
    }


def test_events_query_params_unknown() -> None:
    """Test unknown filters are rejected."""
    with pytest.raises(TypeError, match="Unknown events filter: color"):
        events_query_params(color="blue")


async def test_list(
    aioclient_mock: AiohttpClientMocker,
    qstash: QStash,
) -> None:
    """Test listing events."""
    aioclient_mock.get(
        api_url("/v2/events"),
        params={"queueName": "my-queue"},
        json={
            "cursor": "next",
            "events": [
                _event(body=base64.b64encode(b"hello").decode()),
                _event(state="ERROR", error="boom", nextDeliveryTime=1),
                _event(state="SOMETHING_NEW"),
            ],
        },
    )

    response = await qstash.events.list(queue_name="my-queue")

    assert response["cursor"] == "next"
    events = response["events"]
    assert events[0]["body"] == b"hello"
    assert events[0]["state"] is EventState.DELIVERED
    assert events[1]["state"] is EventState.ERROR
    assert events[1]["error"] == "boom"
    assert events[2]["state"] == "SOMETHING_NEW"
    assert events[2]["body"] == b""


async def test_list_empty(
    aioclient_mock: AiohttpClientMocker,
    qstash: QStash,
) -> None:
    """Test listing without events."""
    aioclient_mock.get(api_url("/v2/events"), json={})

    assert await qstash.events.list() == {"events": []}


async def test_list_invalid_body(
    aioclient_mock: AiohttpClientMocker,
    qstash: QStash,
) -> None:
    """Test a body that is not base64 encoded."""
    aioclient_mock.get(
        api_url("/v2/events"),
        json={"events": [_event(body="not base64!")]},
    )

    with pytest.raises(QStashResponseParseError, match="invalid base64 body"):
        await qstash.events.list()
