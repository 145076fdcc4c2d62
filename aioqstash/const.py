"""Constants for aioqstash."""

from __future__ import annotations

DEFAULT_BASE_URL = "https://qstash.upstash.io"
DEFAULT_USER_AGENT = "aioqstash"

DEFAULT_REQUEST_TIMEOUT = 60.0
DEFAULT_STREAM_READ_TIMEOUT = 120.0

STREAM_DONE_SENTINEL = "[DONE]"

HEADER_DAILY_LIMIT = "RateLimit-Limit"
HEADER_DAILY_RESET = "RateLimit-Reset"
HEADER_BURST_LIMIT = "Burst-RateLimit-Limit"
HEADER_BURST_RESET = "Burst-RateLimit-Reset"
HEADER_CHAT_LIMIT_REQUESTS = "x-ratelimit-limit-requests"
HEADER_CHAT_RESET_REQUESTS = "x-ratelimit-reset-requests"
HEADER_CHAT_RESET_TOKENS = "x-ratelimit-reset-tokens"

HEADER_CRON = "Upstash-Cron"
