"""Tests for the upstream completion clients and error mapping.

The Anthropic client talks to an httpx.MockTransport; the OpenAI client gets
an httpx.AsyncClient backed by one. No real network access.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import json

import httpx
import pytest
from langfuse.openai import AsyncOpenAI as TracedAsyncOpenAI

from cv_roaster.config import Settings
from cv_roaster.core.constants import ANTHROPIC_MESSAGES_URL, LLM_MAX_TOKENS
from cv_roaster.core.errors import (
    AuthError,
    BadRequestError,
    ConfigError,
    RateLimitedError,
    UpstreamError,
)
from cv_roaster.core.llm import (
    AnthropicCompletionClient,
    OpenAICompletionClient,
    build_completion_client,
    map_upstream_error,
)


def _anthropic_ok(text: str = "You call that a CV?") -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "id": "msg_1",
            "type": "message",
            "role": "assistant",
            "content": [{"type": "text", "text": text}],
        },
    )


def _openai_ok(text: str = "You call that a CV?") -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-4o-mini",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": text},
                    "finish_reason": "stop",
                }
            ],
        },
    )


class _Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | None = None, exc: Exception | None = None):
        self.response = response
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response


def _anthropic(handler, **kwargs) -> AnthropicCompletionClient:
    return AnthropicCompletionClient(api_key="test-key", transport=httpx.MockTransport(handler), **kwargs)


def _openai(handler) -> OpenAICompletionClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAICompletionClient(api_key="sk-test", http_client=http_client)


# ===========================================================================
# map_upstream_error
# ===========================================================================


class TestMapUpstreamError:
    @staticmethod
    def _status_error(status: int) -> httpx.HTTPStatusError:
        request = httpx.Request("POST", ANTHROPIC_MESSAGES_URL)
        response = httpx.Response(status, request=request)
        return httpx.HTTPStatusError("boom", request=request, response=response)

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (401, AuthError),
            (429, RateLimitedError),
            (400, BadRequestError),
            (403, UpstreamError),
            (500, UpstreamError),
            (529, UpstreamError),
        ],
    )
    def test_http_status(self, status, expected):
        assert type(map_upstream_error(self._status_error(status))) is expected

    @pytest.mark.parametrize(
        "exc",
        [
            asyncio.TimeoutError(),
            httpx.ConnectError("down"),
            httpx.ReadTimeout("slow"),
            KeyError("content"),
        ],
    )
    def test_everything_else_is_upstream_error(self, exc):
        assert type(map_upstream_error(exc)) is UpstreamError


# ===========================================================================
# AnthropicCompletionClient
# ===========================================================================


@pytest.mark.asyncio
class TestAnthropicClient:
    async def test_returns_first_text_block(self):
        handler = _Recorder(_anthropic_ok("Roasted!"))
        assert await _anthropic(handler).complete("prompt") == "Roasted!"

    async def test_request_shape(self):
        handler = _Recorder(_anthropic_ok())
        await _anthropic(handler, model="claude-test").complete("roast me")

        request = handler.requests[0]
        assert str(request.url) == ANTHROPIC_MESSAGES_URL
        assert request.headers["x-api-key"] == "test-key"
        assert request.headers["anthropic-version"] == "2023-06-01"
        body = json.loads(request.content)
        assert body == {
            "model": "claude-test",
            "max_tokens": LLM_MAX_TOKENS,
            "messages": [{"role": "user", "content": "roast me"}],
        }

    async def test_missing_key_fails_before_network(self):
        handler = _Recorder(_anthropic_ok())
        client = AnthropicCompletionClient(api_key="", transport=httpx.MockTransport(handler))
        with pytest.raises(ConfigError) as exc_info:
            await client.complete("prompt")
        assert exc_info.value.message == "API key not configured"
        assert handler.requests == []

    @pytest.mark.parametrize(
        ("status", "expected", "message"),
        [
            (401, AuthError, "Invalid API key"),
            (429, RateLimitedError, "Rate limit exceeded. Please try again later."),
            (400, BadRequestError, "Invalid request format"),
            (500, UpstreamError, "Failed to get AI feedback. Please try again."),
            (503, UpstreamError, "Failed to get AI feedback. Please try again."),
        ],
    )
    async def test_status_mapping(self, status, expected, message):
        handler = _Recorder(httpx.Response(status, json={"type": "error"}))
        with pytest.raises(expected) as exc_info:
            await _anthropic(handler).complete("prompt")
        assert exc_info.value.message == message

    async def test_single_attempt_no_retry(self):
        handler = _Recorder(httpx.Response(503))
        with pytest.raises(UpstreamError):
            await _anthropic(handler).complete("prompt")
        assert len(handler.requests) == 1

    async def test_network_error(self):
        handler = _Recorder(exc=httpx.ConnectError("connection refused"))
        with pytest.raises(UpstreamError):
            await _anthropic(handler).complete("prompt")

    async def test_timeout(self):
        async def slow(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return _anthropic_ok()

        client = AnthropicCompletionClient(
            api_key="test-key", timeout=0.05, transport=httpx.MockTransport(slow)
        )
        with pytest.raises(UpstreamError):
            await client.complete("prompt")

    @pytest.mark.parametrize(
        "payload",
        [{"content": []}, {"content": [{"type": "image"}]}, {"unexpected": True}],
    )
    async def test_malformed_body(self, payload):
        handler = _Recorder(httpx.Response(200, json=payload))
        with pytest.raises(UpstreamError):
            await _anthropic(handler).complete("prompt")


# ===========================================================================
# OpenAICompletionClient
# ===========================================================================


@pytest.mark.asyncio
class TestOpenAIClient:
    async def test_returns_message_content(self):
        handler = _Recorder(_openai_ok("Roasted by GPT"))
        assert await _openai(handler).complete("prompt") == "Roasted by GPT"
        body = json.loads(handler.requests[0].content)
        assert body["max_tokens"] == LLM_MAX_TOKENS
        assert body["messages"] == [{"role": "user", "content": "prompt"}]

    async def test_sdk_client_is_langfuse_traced(self):
        client = _openai(_Recorder(_openai_ok()))
        assert isinstance(client._client, TracedAsyncOpenAI)

    async def test_missing_key(self):
        with pytest.raises(ConfigError):
            await OpenAICompletionClient(api_key="").complete("prompt")

    @pytest.mark.parametrize(
        ("status", "expected"),
        [(401, AuthError), (429, RateLimitedError), (400, BadRequestError), (500, UpstreamError)],
    )
    async def test_status_mapping(self, status, expected):
        handler = _Recorder(httpx.Response(status, json={"error": {"message": "nope"}}))
        with pytest.raises(expected):
            await _openai(handler).complete("prompt")
        assert len(handler.requests) == 1

    async def test_no_choices(self):
        response = _openai_ok()
        payload = response.json()
        payload["choices"] = []
        handler = _Recorder(httpx.Response(200, json=payload))
        with pytest.raises(UpstreamError):
            await _openai(handler).complete("prompt")


# ===========================================================================
# build_completion_client
# ===========================================================================


class TestBuildCompletionClient:
    def test_anthropic_is_default(self):
        client = build_completion_client(Settings(anthropic_api_key="k", llm_model=""))
        assert isinstance(client, AnthropicCompletionClient)

    def test_openai_provider(self):
        client = build_completion_client(Settings(llm_provider="OpenAI", openai_api_key="k", llm_model=""))
        assert isinstance(client, OpenAICompletionClient)

    def test_model_override(self):
        client = build_completion_client(Settings(llm_provider="anthropic", llm_model="claude-custom"))
        assert client.model == "claude-custom"

    def test_timeout_from_settings(self):
        client = build_completion_client(Settings(llm_provider="anthropic", llm_timeout_seconds=5))
        assert client.timeout == 5

    def test_unknown_provider(self):
        with pytest.raises(ConfigError):
            build_completion_client(Settings(llm_provider="carrier-pigeon"))
