"""Manage signing keys API."""

from __future__ import annotations

from typing import TypedDict

import voluptuous as vol

from .api import ApiBase


class SigningKeys(TypedDict):
    """Current and next signing keys."""

    current: str
    next: str


SIGNING_KEYS_SCHEMA = vol.Schema(
    {
        vol.Required("current"): str,
        vol.Required("next"): str,
    },
    extra=vol.ALLOW_EXTRA,
)


class SigningKeysApi(ApiBase):
    """Class to help communicate with the signing keys API."""

    async def get(self) -> SigningKeys:
        """Get the signing keys."""
        keys: SigningKeys = await self._call_api(
            path="/v2/keys",
            schema=SIGNING_KEYS_SCHEMA,
        )
        return keys

    async def rotate(self) -> SigningKeys:
        """Rotate the signing keys, the next key becomes the current one."""
        keys: SigningKeys = await self._call_api(
            method="POST",
            path="/v2/keys/rotate",
            schema=SIGNING_KEYS_SCHEMA,
        )
        return keys
