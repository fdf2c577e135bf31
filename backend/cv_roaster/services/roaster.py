"""Turn a RoastRequest into a RoastResult via the completion client."""

import time

from cv_roaster.core.llm import CompletionClient
from cv_roaster.core.logger import logger
from cv_roaster.core.tracing import observe
from cv_roaster.models import (
    DocumentRoastRequest,
    ProfileContentRoastRequest,
    ProfileUrlRoastRequest,
    RoastRequest,
    RoastResult,
)
from cv_roaster.services.linkedin import profile_placeholder
from cv_roaster.services.prompts import RoastMode, build_prompt


def count_words(text: str) -> int:
    return len(text.split())


@observe(name="cv-roast", capture_input=False)
async def run_roast(request: RoastRequest, client: CompletionClient) -> RoastResult:
    """Build the prompt for the request kind and ask the LLM for the roast.

    Document text must already be validated/truncated (services.validator).
    Upstream failures propagate as core.errors exceptions.
    """
    start = time.time()

    if isinstance(request, DocumentRoastRequest):
        roast = await client.complete(build_prompt(request.text, RoastMode.CV))
        result = RoastResult(
            roast=roast,
            word_count=count_words(request.text),
            extracted_length=len(request.text),
        )
    elif isinstance(request, ProfileUrlRoastRequest):
        content = profile_placeholder()
        roast = await client.complete(build_prompt(content, RoastMode.LINKEDIN))
        result = RoastResult(roast=roast, profile_url=request.url)
    elif isinstance(request, ProfileContentRoastRequest):
        roast = await client.complete(build_prompt(request.content, RoastMode.LINKEDIN))
        result = RoastResult(roast=roast, profile_url=request.url)
    else:
        raise TypeError(f"Unknown roast request: {type(request).__name__}")

    elapsed_ms = int((time.time() - start) * 1000)
    logger.info(f"Roast ({request.kind}) complete in {elapsed_ms}ms: {len(roast)} chars")
    return result
