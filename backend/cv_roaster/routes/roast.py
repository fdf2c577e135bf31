"""Roast endpoints — CV upload or LinkedIn profile in, AI critique out."""

import asyncio

from fastapi import APIRouter, Body, Depends, File, Request, UploadFile

from cv_roaster.config import load_settings
from cv_roaster.core.constants import MAX_UPLOAD_SIZE, RATE_LIMIT_SCOPE
from cv_roaster.core.errors import MissingInputError, TooLargeError, UnsupportedTypeError
from cv_roaster.core.llm import CompletionClient, get_completion_client
from cv_roaster.core.logger import logger
from cv_roaster.core.rate_limit import limiter, roast_rate_limit
from cv_roaster.core.tracing import flush
from cv_roaster.models import (
    CVRoastResponse,
    DocumentRoastRequest,
    LinkedInRoastBody,
    LinkedInRoastResponse,
)
from cv_roaster.services.extractor import extract_text, is_supported_type, normalize_content_type
from cv_roaster.services.linkedin import build_linkedin_request
from cv_roaster.services.roaster import run_roast
from cv_roaster.services.validator import prepare_content

router = APIRouter(prefix="/api/roast", tags=["Roast"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _read_upload(upload: UploadFile | None) -> tuple[bytes, str]:
    """Check presence, size and type of the upload. Returns (bytes, mime).

    Oversized files are rejected whatever their type. Both checks run
    before extraction.
    """
    if upload is None:
        raise MissingInputError()

    data = await upload.read(MAX_UPLOAD_SIZE + 1)
    if len(data) > MAX_UPLOAD_SIZE:
        logger.warning(f"Rejected upload '{upload.filename}': over {MAX_UPLOAD_SIZE} bytes")
        raise TooLargeError()

    if not is_supported_type(upload.content_type):
        logger.warning(f"Rejected upload '{upload.filename}' with type {upload.content_type!r}")
        raise UnsupportedTypeError()

    return data, normalize_content_type(upload.content_type)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/cv", response_model=CVRoastResponse)
@limiter.shared_limit(roast_rate_limit, scope=RATE_LIMIT_SCOPE)
async def roast_cv(
    request: Request,
    file: UploadFile | None = File(default=None),
    client: CompletionClient = Depends(get_completion_client),
):
    """Multipart upload (field `file`): PDF, DOCX or TXT, max 5MB."""
    settings = load_settings()
    data, mime = await _read_upload(file)
    logger.info(f"Roasting CV '{file.filename}' ({mime}, {len(data)} bytes)")

    text = await asyncio.to_thread(extract_text, data, mime)
    prepared = prepare_content(
        text,
        min_length=settings.min_content_length,
        max_length=settings.max_content_length,
    )

    try:
        result = await run_roast(DocumentRoastRequest(text=prepared), client)
    finally:
        flush()

    return CVRoastResponse(
        roast=result.roast,
        word_count=result.word_count,
        extracted_length=result.extracted_length,
    )


@router.post("/linkedin", response_model=LinkedInRoastResponse, response_model_exclude_none=True)
@limiter.shared_limit(roast_rate_limit, scope=RATE_LIMIT_SCOPE)
async def roast_linkedin(
    request: Request,
    body: LinkedInRoastBody | None = Body(default=None),
    client: CompletionClient = Depends(get_completion_client),
):
    """JSON body `{url?, content?}` — pasted content wins over the URL."""
    body = body or LinkedInRoastBody()
    roast_request = build_linkedin_request(body.url, body.content)
    logger.info(f"Roasting LinkedIn profile ({roast_request.kind})")

    try:
        result = await run_roast(roast_request, client)
    finally:
        flush()

    return LinkedInRoastResponse(roast=result.roast, profile_url=result.profile_url)
