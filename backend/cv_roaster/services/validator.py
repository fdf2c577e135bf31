"""Validate and truncate extracted text before it reaches the prompt."""

from cv_roaster.core.constants import (
    DEFAULT_MAX_CONTENT_LENGTH,
    DEFAULT_MIN_CONTENT_LENGTH,
    TRUNCATION_MARKER,
)
from cv_roaster.core.errors import ValidationError
from cv_roaster.core.logger import logger


def prepare_content(
    text: str | None,
    *,
    min_length: int = DEFAULT_MIN_CONTENT_LENGTH,
    max_length: int = DEFAULT_MAX_CONTENT_LENGTH,
) -> str:
    """Reject near-empty text and cap oversized text.

    The minimum is checked on the trimmed text; truncation keeps the first
    `max_length` characters of the raw text and appends TRUNCATION_MARKER.

    Raises:
        ValidationError: trimmed text shorter than `min_length`.
    """
    if not text or len(text.strip()) < min_length:
        raise ValidationError()

    if len(text) > max_length:
        logger.info(f"Truncating content from {len(text)} to {max_length} chars")
        return text[:max_length] + TRUNCATION_MARKER

    return text
