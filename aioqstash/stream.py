"""Incremental decoding of server-sent event streams."""

from __future__ import annotations

from enum import StrEnum
import json
import logging
import re
from types import TracebackType
from typing import Any, Self

from aiohttp import ClientError, ClientResponse
import voluptuous as vol
from voluptuous.humanize import humanize_error

from .const import STREAM_DONE_SENTINEL
from .errors import (
    QStashApiError,
    QStashRequestError,
    QStashStreamParseError,
    QStashTimeoutError,
)

_LOGGER = logging.getLogger(__name__)

_LINE_END = re.compile(rb"\r\n|\r|\n")


class SSEDecoder:
    """Collect the data of Server-Sent Events from decoded lines.

    Only the data field is kept, other fields and comments are ignored.
    """

    def __init__(self) -> None:
        self._data: list[str] = []
        self._started = False

    @property
    def pending(self) -> bool:
        """Return True if an event has been started but not terminated."""
        return self._started

    def decode(self, line: str) -> str | None:
        """Feed a single decoded line (without trailing newline).

        Returns the event data when a blank line ends an event carrying data.
        """
        if not line:
            data = "\n".join(self._data) if self._data else None
            self._data = []
            self._started = False
            return data

        if line.startswith(":"):
            return None

        self._started = True
        fieldname, _, value = line.partition(":")
        if fieldname == "data":
            self._data.append(value.removeprefix(" "))
        return None


class StreamState(StrEnum):
    """State of a stream session."""

    OPEN = "open"
    DONE = "done"


class StreamSession:
    """Pull decoded events from a streamed response, one frame at a time.

    The session owns the response. It reads from the network only until the
    next frame is complete and releases the connection once it is done.
    A session is not restartable and must only be consumed by one caller.
    """

    def __init__(
        self,
        response: ClientResponse,
        *,
        schema: vol.Schema | None = None,
        sentinel: str = STREAM_DONE_SENTINEL,
    ) -> None:
        """Initialize the stream session."""
        self._response = response
        self._schema = schema
        self._sentinel = sentinel
        self._buffer = bytearray()
        self._decoder = SSEDecoder()
        self._scan_from = 0
        self._eof = False
        self._error: QStashApiError | None = None
        self.state = StreamState.OPEN

    @property
    def done(self) -> bool:
        """Return True when no more events will be produced."""
        return self.state is StreamState.DONE

    async def next(self) -> dict[str, Any] | None:
        """Return the next decoded event, or None at the end of the stream."""
        if self._error is not None:
            raise self._error
        if self.done:
            return None

        try:
            return await self._next_event()
        except QStashApiError as err:
            self._error = err
            self._finish()
            raise

    async def _next_event(self) -> dict[str, Any] | None:
        while True:
            if (line := self._next_line()) is None:
                if self._eof:
                    if self._decoder.pending:
                        _LOGGER.debug("Discarding incomplete frame at end of stream")
                    self._finish()
                    return None
                await self._fill_buffer()
                continue

            try:
                text = line.decode("utf-8")
            except UnicodeDecodeError as err:
                raise QStashStreamParseError(
                    "Stream frame is not valid UTF-8",
                    orig_exc=err,
                ) from err

            if not (data := self._decoder.decode(text)):
                # Keep-alive or event without data
                continue

            if data.strip() == self._sentinel:
                _LOGGER.debug("Stream terminated by sentinel")
                self._finish()
                return None

            return self._parse(data)

    def _next_line(self) -> bytes | None:
        """Pop one complete line from the buffer."""
        # Bytes before _scan_from are known not to end a line.
        match = _LINE_END.search(self._buffer, self._scan_from)
        if match is None:
            self._scan_from = len(self._buffer)
            return None
        # A trailing CR may be the first half of a CRLF pair.
        if (
            match.group() == b"\r"
            and match.end() == len(self._buffer)
            and not self._eof
        ):
            self._scan_from = match.start()
            return None
        line = bytes(self._buffer[: match.start()])
        del self._buffer[: match.end()]
        self._scan_from = 0
        return line

    async def _fill_buffer(self) -> None:
        """Read the next chunk of bytes from the network."""
        try:
            chunk = await self._response.content.readany()
        except TimeoutError as err:
            raise QStashTimeoutError(
                "Timeout reached while reading stream",
                orig_exc=err,
            ) from err
        except ClientError as err:
            raise QStashRequestError(
                f"Failed to read stream: {err}",
                orig_exc=err,
            ) from err

        if not chunk:
            self._eof = True
            return
        self._buffer.extend(chunk)

    def _parse(self, data: str) -> dict[str, Any]:
        try:
            payload = json.loads(data)
        except (json.JSONDecodeError, RecursionError) as err:
            raise QStashStreamParseError(
                f"Failed to parse stream event: {err}",
                orig_exc=err,
            ) from err
        if not isinstance(payload, dict):
            raise QStashStreamParseError("Unexpected event in stream")

        if self._schema is not None:
            try:
                payload = self._schema(payload)
            except vol.Invalid as err:
                raise QStashStreamParseError(
                    f"Invalid stream event: {humanize_error(payload, err)}",
                    orig_exc=err,
                ) from err
        return payload

    def _finish(self) -> None:
        if self.done:
            return
        self.state = StreamState.DONE
        self._buffer.clear()
        self._scan_from = 0
        self._response.release()

    async def aclose(self) -> None:
        """Stop consuming the stream and release the connection."""
        self._finish()

    def __aiter__(self) -> Self:
        """Return the session as async iterator."""
        return self

    async def __anext__(self) -> dict[str, Any]:
        """Return the next event for async iteration."""
        if (event := await self.next()) is None:
            raise StopAsyncIteration
        return event

    async def __aenter__(self) -> Self:
        """Enter the session context."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Release the connection when leaving the context."""
        await self.aclose()
