"""LLM chat completion API."""

from __future__ import annotations

import logging
from typing import Any, Literal, NotRequired, TypedDict

from aiohttp import ClientTimeout, hdrs
import voluptuous as vol

from .api import ApiBase
from .stream import StreamSession

_LOGGER = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/llm/v1/chat/completions"


class ChatMessage(TypedDict):
    """A chat message."""

    role: Literal["system", "assistant", "user"]
    content: str
    name: NotRequired[str]


class ResponseFormat(TypedDict):
    """Required output format of a completion."""

    type: Literal["text", "json_object"]


class ChatCompletionRequest(TypedDict):
    """Parameters of a chat completion."""

    model: str
    messages: list[ChatMessage]
    frequency_penalty: NotRequired[float]
    logit_bias: NotRequired[dict[str, int]]
    logprobs: NotRequired[bool]
    top_logprobs: NotRequired[int]
    max_tokens: NotRequired[int]
    n: NotRequired[int]
    presence_penalty: NotRequired[float]
    response_format: NotRequired[ResponseFormat]
    seed: NotRequired[int]
    stop: NotRequired[list[str]]
    temperature: NotRequired[float]
    top_p: NotRequired[float]


CHAT_COMPLETION_SCHEMA = vol.Schema(
    {
        vol.Optional("id"): str,
        vol.Optional("model"): str,
        vol.Required("choices"): [
            {
                vol.Optional("index"): int,
                vol.Required("message"): {
                    vol.Required("role"): str,
                    vol.Optional("content"): vol.Any(str, None),
                },
                vol.Optional("finish_reason"): vol.Any(str, None),
            }
        ],
    },
    extra=vol.ALLOW_EXTRA,
)

CHAT_COMPLETION_CHUNK_SCHEMA = vol.Schema(
    {
        vol.Optional("id"): str,
        vol.Optional("model"): str,
        vol.Required("choices"): [
            {
                vol.Optional("index"): int,
                vol.Optional("delta", default=dict): {
                    vol.Optional("role"): str,
                    vol.Optional("content"): vol.Any(str, None),
                },
                vol.Optional("finish_reason"): vol.Any(str, None),
            }
        ],
    },
    extra=vol.ALLOW_EXTRA,
)


def delta_content(chunk: dict[str, Any]) -> str:
    """Return the text carried by the deltas of a completion chunk."""
    return "".join(
        content
        for choice in chunk.get("choices", [])
        if isinstance(content := choice.get("delta", {}).get("content"), str)
    )


class LLMApi(ApiBase):
    """Class to help communicate with the LLM API."""

    async def create_chat_completion(
        self,
        request: ChatCompletionRequest,
    ) -> dict[str, Any]:
        """Create a chat completion and return it once it is complete."""
        _LOGGER.debug("Creating chat completion with model %s", request["model"])
        completion: dict[str, Any] = await self._call_api(
            method="POST",
            path=CHAT_COMPLETIONS_PATH,
            jsondata={**request, "stream": False},
            schema=CHAT_COMPLETION_SCHEMA,
        )
        return completion

    async def stream_chat_completion(
        self,
        request: ChatCompletionRequest,
    ) -> StreamSession:
        """Create a chat completion and stream its deltas."""
        _LOGGER.debug("Streaming chat completion with model %s", request["model"])
        response = await self._call_raw_api(
            url=self._build_url(CHAT_COMPLETIONS_PATH),
            method="POST",
            headers={hdrs.ACCEPT: "text/event-stream"},
            jsondata={**request, "stream": True},
            client_timeout=ClientTimeout(
                total=None,
                sock_read=self._qstash.stream_read_timeout,
            ),
        )
        return StreamSession(response, schema=CHAT_COMPLETION_CHUNK_SCHEMA)
