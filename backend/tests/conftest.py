"""Shared fixtures for cv-roaster backend tests."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from httpx import ASGITransport, AsyncClient

from cv_roaster.main import app
from cv_roaster.core.llm import get_completion_client
from cv_roaster.core.rate_limit import limiter


class FakeCompletionClient:
    """Stands in for the upstream LLM — records prompts, returns a canned reply."""

    def __init__(self, reply: str = "Great CV!", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


# 60 distinct words, single spaces, > 50 chars.
FILLER_CV = " ".join(f"filler{i}" for i in range(60))

SAMPLE_CV = (
    "Jane Doe\n"
    "Senior Synergy Evangelist\n\n"
    "Experience\n"
    "- Leveraged cross-functional paradigms to drive results-oriented outcomes.\n"
    "- Responsible for various tasks and duties as assigned.\n\n"
    "Skills\n"
    "Microsoft Word, teamwork, passionate go-getter\n"
)


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Disable slowapi rate limiting for all tests (rate-limit tests re-enable it)."""
    limiter.enabled = False
    yield
    limiter.enabled = True
    limiter.reset()


@pytest.fixture()
def fake_llm():
    """Route the completion dependency to a FakeCompletionClient."""
    fake = FakeCompletionClient()
    app.dependency_overrides[get_completion_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_completion_client, None)


@pytest.fixture
async def client():
    """Async httpx test client wired to the FastAPI app via ASGI transport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
