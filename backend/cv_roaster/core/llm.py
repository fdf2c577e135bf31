"""Central LLM client — Anthropic Messages API by default, OpenAI optional.

All calls are async, bounded by an explicit timeout and attempted exactly
once. Transport/HTTP failures are translated by map_upstream_error so the
routes only ever see the domain taxonomy from core.errors.
"""

import asyncio
from typing import Protocol

import httpx
import openai as openai_errors
from langfuse.openai import AsyncOpenAI

from cv_roaster.config import Settings, load_settings
from cv_roaster.core.constants import (
    ANTHROPIC_MESSAGES_URL,
    ANTHROPIC_VERSION,
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_OPENAI_MODEL,
    LLM_MAX_TOKENS,
    LLM_TIMEOUT_SECONDS,
)
from cv_roaster.core.errors import (
    AuthError,
    BadRequestError,
    ConfigError,
    RateLimitedError,
    RoastError,
    UpstreamError,
)
from cv_roaster.core.logger import logger

_STATUS_ERRORS: dict[int, type[RoastError]] = {
    401: AuthError,
    429: RateLimitedError,
    400: BadRequestError,
}


class CompletionClient(Protocol):
    """Anything that turns a prompt into generated text."""

    async def complete(self, prompt: str) -> str: ...


def _status_code(exc: BaseException) -> int | None:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    if isinstance(exc, openai_errors.APIStatusError):
        return exc.status_code
    return None


def map_upstream_error(exc: BaseException) -> RoastError:
    """Translate a transport/HTTP failure into the domain error taxonomy.

    401/429/400 get their own errors; timeouts, 5xx, network failures and
    malformed bodies all become UpstreamError.
    """
    error_cls = _STATUS_ERRORS.get(_status_code(exc), UpstreamError)
    return error_cls()


def _upstream_detail(exc: BaseException) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}: {exc.response.text[:500]}"
    if isinstance(exc, openai_errors.APIStatusError):
        return f"HTTP {exc.status_code}: {str(exc.body)[:500]}"
    return f"{type(exc).__name__}: {exc}"


class AnthropicCompletionClient:
    """Single-shot calls to the Anthropic Messages API over httpx."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        timeout: float = LLM_TIMEOUT_SECONDS,
        max_tokens: int = LLM_MAX_TOKENS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        if not self.api_key:
            raise ConfigError()

        try:
            return await asyncio.wait_for(self._request(prompt), timeout=self.timeout)
        except (httpx.HTTPError, asyncio.TimeoutError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Anthropic API error: {_upstream_detail(e)}")
            raise map_upstream_error(e) from e

    async def _request(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(ANTHROPIC_MESSAGES_URL, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()

        text = data["content"][0]["text"]
        if not isinstance(text, str):
            raise ValueError("LLM returned a non-text content block")
        return text


class OpenAICompletionClient:
    """Single-shot chat completions through the OpenAI SDK (retries disabled)."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_OPENAI_MODEL,
        timeout: float = LLM_TIMEOUT_SECONDS,
        max_tokens: int = LLM_MAX_TOKENS,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self._client = (
            AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0, http_client=http_client)
            if api_key
            else None
        )

    async def complete(self, prompt: str) -> str:
        if self._client is None:
            raise ConfigError()

        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    max_tokens=self.max_tokens,
                ),
                timeout=self.timeout,
            )
        except (openai_errors.APIError, httpx.HTTPError, asyncio.TimeoutError) as e:
            logger.error(f"OpenAI API error: {_upstream_detail(e)}")
            raise map_upstream_error(e) from e

        if not response.choices or response.choices[0].message.content is None:
            logger.error("OpenAI API error: no choices in response")
            raise UpstreamError()

        return response.choices[0].message.content


def build_completion_client(settings: Settings) -> CompletionClient:
    """Create the client for the configured provider."""
    provider = settings.llm_provider.lower()
    if provider == "anthropic":
        return AnthropicCompletionClient(
            api_key=settings.anthropic_api_key,
            model=settings.llm_model or DEFAULT_ANTHROPIC_MODEL,
            timeout=settings.llm_timeout_seconds,
        )
    if provider == "openai":
        return OpenAICompletionClient(
            api_key=settings.openai_api_key,
            model=settings.llm_model or DEFAULT_OPENAI_MODEL,
            timeout=settings.llm_timeout_seconds,
        )
    raise ConfigError(f"Unsupported LLM provider: {settings.llm_provider}")


_client: CompletionClient | None = None
_lock = asyncio.Lock()


async def get_completion_client() -> CompletionClient:
    """Get or create the singleton completion client (FastAPI dependency)."""
    global _client
    if _client is None:
        async with _lock:
            if _client is None:
                _client = build_completion_client(load_settings())
    return _client
