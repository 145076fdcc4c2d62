"""Manage queues API."""

from __future__ import annotations

import logging
from typing import TypedDict

import voluptuous as vol

from .api import ApiBase, path_segment

_LOGGER = logging.getLogger(__name__)


class Queue(TypedDict):
    """Metadata of a queue."""

    createdAt: int
    updatedAt: int
    name: str
    parallelism: int
    lag: int
    paused: bool


QUEUE_SCHEMA = vol.Schema(
    {
        vol.Required("createdAt"): int,
        vol.Required("updatedAt"): int,
        vol.Required("name"): str,
        vol.Required("parallelism"): int,
        vol.Optional("lag", default=0): int,
        vol.Optional("paused", default=False): bool,
    },
    extra=vol.ALLOW_EXTRA,
)


class QueuesApi(ApiBase):
    """Class to help communicate with the queues API."""

    async def upsert(self, queue_name: str, *, parallelism: int) -> None:
        """Create or update a queue."""
        _LOGGER.debug("Upserting queue %s", queue_name)
        await self._call_api(
            method="POST",
            path="/v2/queues/",
            jsondata={
                "queueName": queue_name,
                "parallelism": parallelism,
            },
        )

    async def remove(self, queue_name: str) -> None:
        """Remove a queue."""
        await self._call_api(
            method="DELETE",
            path=f"/v2/queues/{path_segment(queue_name, name='queue name')}",
        )

    async def list(self) -> list[Queue]:
        """List all queues."""
        queues: list[Queue] = await self._call_api(
            path="/v2/queues/",
            schema=vol.Schema([QUEUE_SCHEMA]),
        )
        return queues

    async def get(self, queue_name: str) -> Queue:
        """Get a queue."""
        queue: Queue = await self._call_api(
            path=f"/v2/queues/{path_segment(queue_name, name='queue name')}",
            schema=QUEUE_SCHEMA,
        )
        return queue

    async def pause(self, queue_name: str) -> None:
        """Pause delivery of the messages in a queue."""
        await self._call_api(
            method="POST",
            path=f"/v2/queues/{path_segment(queue_name, name='queue name')}/pause",
        )

    async def resume(self, queue_name: str) -> None:
        """Resume delivery of the messages in a queue."""
        await self._call_api(
            method="POST",
            path=f"/v2/queues/{path_segment(queue_name, name='queue name')}/resume",
        )
