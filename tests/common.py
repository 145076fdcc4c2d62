"""Test the helper method for writing tests."""

from __future__ import annotations

import pytest

API_TOKEN = "test_api_key"
BASE_URL = "https://qstash.test"


def api_url(path: str) -> str:
    """Return the mocked API URL for a path."""
    return f"{BASE_URL}{path}"


def sse_frame(data: str) -> bytes:
    """Return one server-sent event frame carrying data."""
    return f"data: {data}\n\n".encode()


def extract_log_messages(caplog: pytest.LogCaptureFixture) -> str:
    """Extract log messages as string from caplog fixture."""
    return "\n".join(
        [
            f"[{record.levelname}] {record.name}: {record.message}"
            for record in caplog.records
        ]
    )
