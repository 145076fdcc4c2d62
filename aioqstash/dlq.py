"""Manage dead letter queue API."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NotRequired, TypedDict

import voluptuous as vol

from .api import ApiBase, path_segment


class DlqMessage(TypedDict):
    """A message that could not be delivered."""

    dlqId: str
    messageId: str
    url: NotRequired[str]
    topicName: NotRequired[str]
    method: NotRequired[str]
    header: dict[str, list[str]]
    body: NotRequired[str]
    createdAt: NotRequired[int]
    responseStatus: NotRequired[int]
    responseBody: NotRequired[str]


class DlqMessages(TypedDict):
    """A page of dead letter queue messages."""

    cursor: NotRequired[str]
    messages: list[DlqMessage]


DLQ_MESSAGE_SCHEMA = vol.Schema(
    {
        vol.Required("dlqId"): str,
        vol.Required("messageId"): str,
        vol.Optional("url"): str,
        vol.Optional("topicName"): str,
        vol.Optional("method"): str,
        vol.Optional("header", default=dict): {str: [str]},
        vol.Optional("body"): str,
        vol.Optional("createdAt"): int,
        vol.Optional("responseStatus"): int,
        vol.Optional("responseBody"): str,
    },
    extra=vol.ALLOW_EXTRA,
)

DLQ_MESSAGES_SCHEMA = vol.Schema(
    {
        vol.Optional("cursor"): vol.Any(str, None),
        vol.Optional("messages", default=list): [DLQ_MESSAGE_SCHEMA],
    },
    extra=vol.ALLOW_EXTRA,
)


class DeadLetterQueueApi(ApiBase):
    """Class to help communicate with the dead letter queue API."""

    async def get(self, dlq_id: str) -> DlqMessage:
        """Get a message from the dead letter queue."""
        message: DlqMessage = await self._call_api(
            path=f"/v2/dlq/{path_segment(dlq_id, name='DLQ id')}",
            schema=DLQ_MESSAGE_SCHEMA,
        )
        return message

    async def delete(self, dlq_id: str) -> None:
        """Delete a message from the dead letter queue."""
        await self._call_api(
            method="DELETE",
            path=f"/v2/dlq/{path_segment(dlq_id, name='DLQ id')}",
        )

    async def delete_many(self, dlq_ids: Iterable[str]) -> None:
        """Delete multiple messages from the dead letter queue."""
        await self._call_api(
            method="DELETE",
            path="/v2/dlq",
            jsondata={"dlqIds": list(dlq_ids)},
        )

    async def list(
        self,
        *,
        cursor: str | None = None,
        count: int | None = None,
    ) -> DlqMessages:
        """List messages in the dead letter queue."""
        params: dict[str, str] = {}
        if cursor is not None:
            params["cursor"] = cursor
        if count is not None:
            params["count"] = str(count)
        messages: DlqMessages = await self._call_api(
            path="/v2/dlq",
            params=params,
            schema=DLQ_MESSAGES_SCHEMA,
        )
        return messages
