"""Text extraction: uploaded PDF / DOCX / TXT bytes → plain text."""

import io
from collections.abc import Callable

import pdfplumber
from docx import Document

from cv_roaster.core.constants import DOCX_MIME, PDF_MIME, TXT_MIME
from cv_roaster.core.errors import ExtractionError, UnsupportedTypeError
from cv_roaster.core.logger import logger


def normalize_content_type(content_type: str | None) -> str:
    """'Text/Plain; charset=utf-8' → 'text/plain'."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def extract_pdf_text(data: bytes) -> str:
    """All page text in document order."""
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.warning(f"PDF extraction failed: {e}")
        raise ExtractionError.for_format("PDF") from e
    return "\n".join(pages)


def extract_docx_text(data: bytes) -> str:
    """Raw paragraph text, formatting discarded."""
    try:
        doc = Document(io.BytesIO(data))
    except Exception as e:
        logger.warning(f"DOCX extraction failed: {e}")
        raise ExtractionError.for_format("DOCX") from e
    return "\n".join(p.text for p in doc.paragraphs)


def extract_txt_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"TXT extraction failed: {e}")
        raise ExtractionError.for_format("TXT") from e


_EXTRACTORS: dict[str, Callable[[bytes], str]] = {
    PDF_MIME: extract_pdf_text,
    DOCX_MIME: extract_docx_text,
    TXT_MIME: extract_txt_text,
}


def is_supported_type(content_type: str | None) -> bool:
    return normalize_content_type(content_type) in _EXTRACTORS


def extract_text(data: bytes, content_type: str | None) -> str:
    """Dispatch on the declared MIME type.

    Raises:
        UnsupportedTypeError: type outside the PDF/DOCX/TXT allow-list.
        ExtractionError: the parser could not read the file.
    """
    mime = normalize_content_type(content_type)
    extractor = _EXTRACTORS.get(mime)
    if extractor is None:
        raise UnsupportedTypeError()

    text = extractor(data)
    logger.info(f"Extracted {len(text)} chars from {mime} ({len(data)} bytes)")
    return text
