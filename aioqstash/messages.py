"""Manage messages API."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import NotRequired, TypeAlias, TypedDict

import voluptuous as vol

from .api import ApiBase, path_segment, require_path_value

_LOGGER = logging.getLogger(__name__)


class MessageResponse(TypedDict):
    """Response for a published message."""

    messageId: str
    url: NotRequired[str]
    deduplicated: NotRequired[bool]


MessageResponseResult: TypeAlias = MessageResponse | list[MessageResponse]


class Message(TypedDict):
    """A message stored in QStash."""

    messageId: str
    topicName: NotRequired[str]
    url: str
    method: str
    header: dict[str, list[str]]
    body: str
    createdAt: int


class BatchEntry(TypedDict):
    """A single message of a batch request."""

    destination: str
    queue: NotRequired[str]
    headers: dict[str, str]
    body: NotRequired[str]


MESSAGE_RESPONSE_SCHEMA = vol.Schema(
    {
        vol.Required("messageId"): str,
        vol.Optional("url"): str,
        vol.Optional("deduplicated"): bool,
    },
    extra=vol.ALLOW_EXTRA,
)

MESSAGE_RESPONSE_RESULT_SCHEMA = vol.Schema(
    vol.Any(MESSAGE_RESPONSE_SCHEMA, [MESSAGE_RESPONSE_SCHEMA])
)

MESSAGE_SCHEMA = vol.Schema(
    {
        vol.Required("messageId"): str,
        vol.Optional("topicName"): str,
        vol.Required("url"): str,
        vol.Required("method"): str,
        vol.Optional("header", default=dict): {str: [str]},
        vol.Optional("body", default=""): str,
        vol.Required("createdAt"): int,
    },
    extra=vol.ALLOW_EXTRA,
)


class MessagesApi(ApiBase):
    """Class to help communicate with the messages API."""

    async def publish(
        self,
        destination: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
    ) -> MessageResponseResult:
        """Publish a message to a URL or URL group."""
        _LOGGER.debug("Publishing message")
        result: MessageResponseResult = await self._call_api(
            method="POST",
            path=f"/v2/publish/{require_path_value(destination, name='destination')}",
            headers=headers,
            data=body,
            schema=MESSAGE_RESPONSE_RESULT_SCHEMA,
        )
        return result

    async def enqueue(
        self,
        destination: str,
        queue_name: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
    ) -> MessageResponseResult:
        """Enqueue a message on a queue."""
        _LOGGER.debug("Enqueueing message on queue %s", queue_name)
        result: MessageResponseResult = await self._call_api(
            method="POST",
            path=(
                f"/v2/enqueue/{path_segment(queue_name, name='queue name')}"
                f"/{require_path_value(destination, name='destination')}"
            ),
            headers=headers,
            data=body,
            schema=MESSAGE_RESPONSE_RESULT_SCHEMA,
        )
        return result

    async def batch(self, entries: Iterable[BatchEntry]) -> list[MessageResponseResult]:
        """Publish multiple messages in one request."""
        result: list[MessageResponseResult] = await self._call_api(
            method="POST",
            path="/v2/batch",
            jsondata=list(entries),
            schema=vol.Schema([MESSAGE_RESPONSE_RESULT_SCHEMA]),
        )
        return result

    async def get(self, message_id: str) -> Message:
        """Get a message."""
        message: Message = await self._call_api(
            path=f"/v2/messages/{path_segment(message_id, name='message id')}",
            schema=MESSAGE_SCHEMA,
        )
        return message

    async def cancel(self, message_id: str) -> None:
        """Cancel delivery of a message."""
        await self._call_api(
            method="DELETE",
            path=f"/v2/messages/{path_segment(message_id, name='message id')}",
        )

    async def bulk_cancel(self, message_ids: Iterable[str]) -> None:
        """Cancel delivery of multiple messages."""
        await self._call_api(
            method="DELETE",
            path="/v2/messages",
            jsondata={"messageIds": list(message_ids)},
        )
