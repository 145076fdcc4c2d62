"""Define the API base class."""

from __future__ import annotations

from collections.abc import Mapping
import contextlib
from http import HTTPStatus
from json import JSONDecodeError
import logging
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError, ClientResponse, ClientTimeout, hdrs
from aiohttp.typedefs import Query
from multidict import CIMultiDict
import voluptuous as vol
from voluptuous.humanize import humanize_error
from yarl import URL

from .errors import (
    QStashInvalidRequestUrlError,
    QStashRequestError,
    QStashResponseParseError,
    QStashTimeoutError,
)
from .rate_limit import classify_rate_limit
from .utils import quote_segment

if TYPE_CHECKING:
    from . import QStash

_LOGGER = logging.getLogger(__name__)

ALLOW_EMPTY_RESPONSE = frozenset(
    {
        "DELETE",
        "POST",
        "HEAD",
    }
)


def require_path_value(value: str, *, name: str) -> str:
    """Return a value used in a request path, rejecting empty values."""
    if not value or not value.strip():
        raise QStashInvalidRequestUrlError(f"Invalid request URL: empty {name}")
    return value


def path_segment(value: str, *, name: str = "identifier") -> str:
    """Return an encoded path segment, rejecting empty values."""
    return quote_segment(require_path_value(value, name=name))


class ApiBase:
    """Class to help communicate with the QStash API."""

    def __init__(self, qstash: QStash) -> None:
        """Initialize the API base."""
        self._qstash = qstash

    def _build_url(self, path: str) -> URL:
        """Resolve a path against the configured base URL."""
        if not path.startswith("/"):
            raise QStashInvalidRequestUrlError(f"Invalid request URL: {path}")
        try:
            url = URL(f"{self._qstash.base_url}{path}")
        except (TypeError, ValueError) as err:
            raise QStashInvalidRequestUrlError(
                f"Invalid request URL: {path}",
                orig_exc=err,
            ) from err
        if not url.is_absolute():
            raise QStashInvalidRequestUrlError(f"Invalid request URL: {url}")
        return url

    def _do_log_request(self, method: str, url: URL) -> None:
        """Log the request."""
        if not _LOGGER.isEnabledFor(logging.DEBUG):
            return
        _LOGGER.debug("Sending %s request to %s%s", method, url.host, url.path)

    def _do_log_response(self, resp: ClientResponse, reason: str | None = None) -> None:
        """Log the response."""
        if not _LOGGER.isEnabledFor(logging.DEBUG):
            return
        target = resp.url.path
        if len(resp.url.query) > 0:
            allowed_values = {"true", "false"}
            query_params = [
                f"{key}=***"
                if value.lower() not in allowed_values
                else f"{key}={value}"
                for key, value in resp.url.query.items()
            ]
            target += f"?{'&'.join(query_params)}"
        _LOGGER.debug(
            "Response for %s from %s%s (%s) %s",
            resp.method,
            resp.url.host,
            target,
            resp.status,
            reason or "",
        )

    async def _call_raw_api(
        self,
        *,
        url: URL,
        method: str,
        headers: Mapping[str, str] | None = None,
        jsondata: dict[str, Any] | list[Any] | None = None,
        data: Any | None = None,
        params: Query | None = None,
        client_timeout: ClientTimeout | None = None,
    ) -> ClientResponse:
        """Send an authenticated request and classify failed responses.

        Successful responses are returned unconsumed. Throttled responses raise
        the rate limit error matching their headers, every other error status
        raises QStashRequestError.
        """
        request_headers: CIMultiDict[str] = CIMultiDict(headers or {})
        request_headers[hdrs.AUTHORIZATION] = f"Bearer {self._qstash.token}"
        request_headers.setdefault(hdrs.USER_AGENT, self._qstash.user_agent)
        client_timeout = client_timeout or ClientTimeout(
            total=self._qstash.request_timeout
        )

        self._do_log_request(method, url)
        try:
            resp = await self._qstash.websession.request(
                method=method,
                url=url,
                timeout=client_timeout,
                headers=request_headers,
                json=jsondata,
                data=data,
                params=params,
            )
        except TimeoutError as err:
            raise QStashTimeoutError(
                f"Timeout reached while calling API: total allowed time is "
                f"{client_timeout.total} seconds",
                orig_exc=err,
            ) from err
        except ClientError as err:
            raise QStashRequestError(f"Failed to fetch: {err}", orig_exc=err) from err
        except Exception as err:
            raise QStashRequestError(
                f"Unexpected error while calling API: {err}",
                orig_exc=err,
            ) from err

        if resp.status == HTTPStatus.TOO_MANY_REQUESTS:
            self._do_log_response(resp)
            resp.release()
            raise classify_rate_limit(resp.headers)

        if resp.status >= 400:
            reason: str | None = None
            with contextlib.suppress(ClientError, UnicodeDecodeError):
                reason = await resp.text()
            resp.release()
            self._do_log_response(resp, reason)
            raise QStashRequestError(
                f"Failed to fetch: ({resp.status}) {resp.reason}",
                reason=reason,
                status=resp.status,
            )

        self._do_log_response(resp)
        return resp

    async def _call_api(
        self,
        *,
        path: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        jsondata: dict[str, Any] | list[Any] | None = None,
        data: Any | None = None,
        params: Query | None = None,
        schema: vol.Schema | None = None,
    ) -> Any:
        """Call the QStash API and decode the JSON response."""
        resp = await self._call_raw_api(
            url=self._build_url(path),
            method=method,
            headers=headers,
            jsondata=jsondata,
            data=data,
            params=params,
        )

        try:
            payload = await resp.json(content_type=None)
        except (JSONDecodeError, UnicodeDecodeError, RecursionError) as err:
            raise QStashResponseParseError(
                f"Failed to parse API response: {err}",
                orig_exc=err,
            ) from err
        except ClientError as err:
            raise QStashRequestError(
                f"Failed to read API response: {err}",
                orig_exc=err,
                status=resp.status,
            ) from err
        finally:
            resp.release()

        if payload is None and method.upper() not in ALLOW_EMPTY_RESPONSE:
            raise QStashResponseParseError("Failed to parse API response")

        if schema is not None:
            try:
                payload = schema(payload)
            except vol.Invalid as err:
                raise QStashResponseParseError(
                    f"Invalid response: {humanize_error(payload, err)}",
                    orig_exc=err,
                ) from err

        return payload
