"""Manage schedules API."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import NotRequired, TypedDict

from multidict import CIMultiDict
import voluptuous as vol

from .api import ApiBase, path_segment, require_path_value
from .const import HEADER_CRON

_LOGGER = logging.getLogger(__name__)


class CreateScheduleResponse(TypedDict):
    """Response for a created schedule."""

    scheduleId: str


class Schedule(TypedDict):
    """A schedule stored in QStash."""

    createdAt: int
    id: str
    cron: str
    destination: str
    method: str
    header: dict[str, list[str]]
    body: str
    retries: NotRequired[int]
    delay: NotRequired[int]
    callback: NotRequired[str]
    isPaused: NotRequired[bool]


CREATE_SCHEDULE_SCHEMA = vol.Schema(
    {vol.Required("scheduleId"): str},
    extra=vol.ALLOW_EXTRA,
)

SCHEDULE_SCHEMA = vol.Schema(
    {
        vol.Required("createdAt"): int,
        vol.Required("id"): str,
        vol.Required("cron"): str,
        vol.Required("destination"): str,
        vol.Optional("method", default="POST"): str,
        vol.Optional("header", default=dict): {str: [str]},
        vol.Optional("body", default=""): str,
        vol.Optional("retries"): int,
        vol.Optional("delay"): int,
        vol.Optional("callback"): str,
        vol.Optional("isPaused"): bool,
    },
    extra=vol.ALLOW_EXTRA,
)


def _schedule_path(schedule_id: str) -> str:
    return f"/v2/schedules/{path_segment(schedule_id, name='schedule id')}"


class SchedulesApi(ApiBase):
    """Class to help communicate with the schedules API."""

    async def create(
        self,
        destination: str,
        *,
        cron: str,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
    ) -> CreateScheduleResponse:
        """Create a schedule delivering a message to a destination."""
        _LOGGER.debug("Creating schedule with cron %s", cron)
        request_headers: CIMultiDict[str] = CIMultiDict(headers or {})
        request_headers[HEADER_CRON] = cron
        destination = require_path_value(destination, name="destination")
        response: CreateScheduleResponse = await self._call_api(
            method="POST",
            path=f"/v2/schedules/{destination}",
            headers=request_headers,
            data=body,
            schema=CREATE_SCHEDULE_SCHEMA,
        )
        return response

    async def get(self, schedule_id: str) -> Schedule:
        """Get a schedule."""
        schedule: Schedule = await self._call_api(
            path=_schedule_path(schedule_id),
            schema=SCHEDULE_SCHEMA,
        )
        return schedule

    async def list(self) -> list[Schedule]:
        """List all schedules."""
        schedules: list[Schedule] = await self._call_api(
            path="/v2/schedules",
            schema=vol.Schema([SCHEDULE_SCHEMA]),
        )
        return schedules

    async def remove(self, schedule_id: str) -> None:
        """Remove a schedule."""
        await self._call_api(
            method="DELETE",
            path=_schedule_path(schedule_id),
        )

    async def pause(self, schedule_id: str) -> None:
        """Pause a schedule."""
        await self._call_api(
            method="POST",
            path=f"{_schedule_path(schedule_id)}/pause",
        )

    async def resume(self, schedule_id: str) -> None:
        """Resume a paused schedule."""
        await self._call_api(
            method="POST",
            path=f"{_schedule_path(schedule_id)}/resume",
        )
