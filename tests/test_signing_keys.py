"""Test the signing keys API."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from aioqstash.errors import QStashResponseParseError

from .common import api_url

if TYPE_CHECKING:
    from aioqstash import QStash

    from .utils.aiohttp import AiohttpClientMocker


async def test_get(
    aioclient_mock: AiohttpClientMocker,
    qstash: QStash,
) -> None:
    """Test getting the signing keys."""
    aioclient_mock.get(api_url("/v2/keys"), json={"current": "sig_1", "next": "sig_2"})

    assert await qstash.signing_keys.get() == {"current": "sig_1", "next": "sig_2"}


async def test_rotate(
    aioclient_mock: AiohttpClientMocker,
    qstash: QStash,
) -> None:
    """Test rotating the signing keys."""
    aioclient_mock.post(
        api_url("/v2/keys/rotate"),
        json={"current": "sig_2", "next": "sig_3"},
    )

    keys = await qstash.signing_keys.rotate()

    assert keys["current"] == "sig_2"
    assert aioclient_mock.mock_calls[0][0] == "POST"


async def test_get_invalid(
    aioclient_mock: AiohttpClientMocker,
    qstash: QStash,
) -> None:
    """Test an incomplete response."""
    aioclient_mock.get(api_url("/v2/keys"), json={"current": "sig_1"})

    with pytest.raises(QStashResponseParseError):
        await qstash.signing_keys.get()
