"""Set up some common test helper things."""

import logging

import pytest

from aioqstash import QStash

from .common import API_TOKEN, BASE_URL
from .utils.aiohttp import AiohttpClientMocker

logging.basicConfig(level=logging.DEBUG)


@pytest.fixture
def aioclient_mock():
    """Fixture to mock aioclient calls."""
    return AiohttpClientMocker()


@pytest.fixture
async def websession(aioclient_mock):
    """Return a client session bound to the request mocker."""
    session = aioclient_mock.create_session()
    yield session
    await session.close()


@pytest.fixture
def qstash(websession):
    """Return a QStash client talking to the mocked API."""
    return QStash(websession, API_TOKEN, base_url=BASE_URL)
