"""Aiohttp test utils."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from functools import partial
from http import HTTPStatus
import json as _json
from typing import Any
from urllib.parse import parse_qs

from aiohttp import ClientSession
from multidict import CIMultiDict, CIMultiDictProxy
from yarl import URL


class AiohttpClientMocker:
    """Mock Aiohttp client requests."""

    def __init__(self) -> None:
        """Initialize the request mocker."""
        self._mocks: list[AiohttpClientMockResponse] = []
        self.mock_calls: list[tuple[str, URL, Any, Any]] = []

    def request(
        self,
        method: str,
        url: str | URL,
        *,
        status: int = 200,
        text: str | None = None,
        content: bytes | None = None,
        json: Any = None,
        chunks: Iterable[bytes | Exception] | None = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        exc: Exception | None = None,
    ) -> None:
        """Mock a request."""
        if isinstance(url, str):
            url = URL(url)
        if params:
            url = url.with_query(params)

        self._mocks.append(
            AiohttpClientMockResponse(
                method=method,
                url=url,
                status=status,
                response=content,
                json=json,
                text=text,
                chunks=chunks,
                headers=headers,
                exc=exc,
            )
        )

    def get(self, *args: Any, **kwargs: Any) -> None:
        """Register a mock get request."""
        self.request("get", *args, **kwargs)

    def put(self, *args: Any, **kwargs: Any) -> None:
        """Register a mock put request."""
        self.request("put", *args, **kwargs)

    def post(self, *args: Any, **kwargs: Any) -> None:
        """Register a mock post request."""
        self.request("post", *args, **kwargs)

    def delete(self, *args: Any, **kwargs: Any) -> None:
        """Register a mock delete request."""
        self.request("delete", *args, **kwargs)

    def patch(self, *args: Any, **kwargs: Any) -> None:
        """Register a mock patch request."""
        self.request("patch", *args, **kwargs)

    @property
    def call_count(self) -> int:
        """Return the number of requests made."""
        return len(self.mock_calls)

    def clear_requests(self) -> None:
        """Reset mock calls."""
        self._mocks.clear()
        self.mock_calls.clear()

    def create_session(self) -> ClientSession:
        """Create a ClientSession that is bound to this mocker."""
        session = ClientSession()
        # Setting directly on `session` will raise deprecation warning
        object.__setattr__(session, "_request", self.match_request)
        return session

    async def match_request(
        self,
        method: str,
        url: str | URL,
        *,
        data: Any = None,
        params: Any = None,
        headers: Any = None,
        json: Any = None,
        **kwargs: Any,
    ) -> AiohttpClientMockResponse:
        """Match a request against pre-registered requests."""
        url = URL(url) if isinstance(url, str) else url
        if params:
            url = url.with_query(params)

        for response in self._mocks:
            if response.match_request(method, url):
                self.mock_calls.append(
                    (method, url, json if json is not None else data, headers)
                )
                if response.exc:
                    raise response.exc
                return response

        raise AssertionError(f"No mock registered for {method.upper()} {url}")


class MockStreamReader:
    """Mock of the aiohttp stream reader, serving one chunk per read."""

    def __init__(self, chunks: Iterable[bytes | Exception]) -> None:
        """Initialize the stream reader."""
        self._chunks: deque[bytes | Exception] = deque(chunks)
        self.read_count = 0

    @property
    def remaining(self) -> int:
        """Return the number of chunks not read yet."""
        return len(self._chunks)

    async def readany(self) -> bytes:
        """Return the next chunk, or b"" at the end of the stream."""
        self.read_count += 1
        if not self._chunks:
            return b""
        chunk = self._chunks.popleft()
        if isinstance(chunk, Exception):
            raise chunk
        return chunk


class AiohttpClientMockResponse:
    """Mock Aiohttp client response."""

    def __init__(
        self,
        method: str,
        url: URL,
        status: int = 200,
        response: bytes | None = None,
        json: Any = None,
        text: str | None = None,
        chunks: Iterable[bytes | Exception] | None = None,
        headers: dict[str, str] | None = None,
        exc: Exception | None = None,
    ) -> None:
        """Initialize a fake response."""
        self._headers: CIMultiDict[str] = CIMultiDict(headers or {})
        if json is not None:
            text = _json.dumps(json)
            self._headers.setdefault("Content-Type", "application/json")
        if text is not None:
            response = text.encode("utf-8")
        if chunks is not None:
            chunks = list(chunks)
            response = b"".join(chunk for chunk in chunks if isinstance(chunk, bytes))
        if response is None:
            response = b""

        self.method = method.upper()
        self._url = url
        self.status = status
        self.exc = exc
        self._response = response
        self.content = MockStreamReader(chunks if chunks is not None else [response])
        self.released = False

    def match_request(self, method: str, url: URL) -> bool:
        """Test if response answers request."""
        if method.upper() != self.method:
            return False

        if (
            self._url.scheme != url.scheme
            or self._url.host != url.host
            or self._url.path != url.path
        ):
            return False

        # Ensure all query components in matcher are present in the request
        request_qs = parse_qs(url.query_string)
        matcher_qs = parse_qs(self._url.query_string)
        for key, vals in matcher_qs.items():
            for val in vals:
                try:
                    request_qs.get(key, []).remove(val)
                except ValueError:
                    return False

        return True

    @property
    def headers(self) -> CIMultiDictProxy[str]:
        """Return headers of the response."""
        return CIMultiDictProxy(self._headers)

    @property
    def url(self) -> URL:
        """Return the URL of the response."""
        return self._url

    @property
    def reason(self) -> str:
        """Return the reason phrase of the status."""
        return HTTPStatus(self.status).phrase

    @property
    def ok(self) -> bool:
        """Return True if the status is not an error."""
        return self.status < 400

    async def read(self) -> bytes:
        """Return the mock response body."""
        return self._response

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        """Return the mock response as a string."""
        return self._response.decode(encoding, errors=errors)

    async def json(
        self,
        encoding: str = "utf-8",
        content_type: str | None = "application/json",
        loads: Any = _json.loads,
    ) -> Any:
        """Return the mock response as a json object."""
        if not self._response.strip():
            return None
        return loads(self._response.decode(encoding))

    def release(self) -> None:
        """Mock release."""
        self.released = True

    def close(self) -> None:
        """Mock close."""
        self.released = True


def mock_response(
    method: str,
    url: str,
    **kwargs: Any,
) -> AiohttpClientMockResponse:
    """Create a standalone mock response."""
    return AiohttpClientMockResponse(method, URL(url), **kwargs)


mock_stream_response = partial(mock_response, "POST", "https://qstash.test/stream")
