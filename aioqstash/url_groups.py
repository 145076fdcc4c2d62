"""Manage URL groups API."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import NotRequired, TypedDict

import voluptuous as vol

from .api import ApiBase, path_segment

_LOGGER = logging.getLogger(__name__)


class Endpoint(TypedDict):
    """An endpoint of a URL group."""

    name: NotRequired[str]
    url: NotRequired[str]


class UrlGroup(TypedDict):
    """A URL group and its endpoints."""

    createdAt: int
    updatedAt: int
    name: str
    endpoints: list[Endpoint]


ENDPOINT_SCHEMA = vol.Schema(
    {
        vol.Optional("name"): str,
        vol.Optional("url"): str,
    },
    extra=vol.ALLOW_EXTRA,
)

URL_GROUP_SCHEMA = vol.Schema(
    {
        vol.Optional("createdAt", default=0): int,
        vol.Optional("updatedAt", default=0): int,
        vol.Required("name"): str,
        vol.Optional("endpoints", default=list): [ENDPOINT_SCHEMA],
    },
    extra=vol.ALLOW_EXTRA,
)


def _serialize_endpoints(endpoints: Iterable[Endpoint]) -> list[dict[str, str]]:
    """Drop empty endpoint fields, the API rejects them."""
    return [
        {key: value for key, value in endpoint.items() if value}
        for endpoint in endpoints
    ]


def _url_group_path(url_group_name: str) -> str:
    return f"/v2/topics/{path_segment(url_group_name, name='URL group name')}"


class UrlGroupsApi(ApiBase):
    """Class to help communicate with the URL groups API."""

    async def upsert_endpoints(
        self,
        url_group_name: str,
        endpoints: Iterable[Endpoint],
    ) -> None:
        """Add endpoints to a URL group, creating the group if needed."""
        _LOGGER.debug("Upserting endpoints of URL group %s", url_group_name)
        await self._call_api(
            method="POST",
            path=f"{_url_group_path(url_group_name)}/endpoints",
            jsondata={"endpoints": _serialize_endpoints(endpoints)},
        )

    async def get(self, url_group_name: str) -> UrlGroup:
        """Get a URL group."""
        url_group: UrlGroup = await self._call_api(
            path=_url_group_path(url_group_name),
            schema=URL_GROUP_SCHEMA,
        )
        return url_group

    async def remove_endpoints(
        self,
        url_group_name: str,
        endpoints: Iterable[Endpoint],
    ) -> None:
        """Remove endpoints from a URL group."""
        await self._call_api(
            method="DELETE",
            path=f"{_url_group_path(url_group_name)}/endpoints",
            jsondata={"endpoints": _serialize_endpoints(endpoints)},
        )

    async def remove(self, url_group_name: str) -> None:
        """Remove a URL group."""
        await self._call_api(
            method="DELETE",
            path=_url_group_path(url_group_name),
        )

    async def list(self) -> list[UrlGroup]:
        """List all URL groups."""
        url_groups: list[UrlGroup] = await self._call_api(
            path="/v2/topics",
            schema=vol.Schema([URL_GROUP_SCHEMA]),
        )
        return url_groups
