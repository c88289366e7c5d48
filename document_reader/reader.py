"""Format dispatch for uploaded documents."""
from __future__ import annotations

import logging
import typing as t

from .errors import DecodeError, UnsupportedFormat
from .models import UploadedDocument
from .pdf_utils import PdfCapability

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "txt", "md")
TEXT_ENCODING = "utf-8-sig"


def read_document(document: UploadedDocument, pdf: t.Optional[PdfCapability] = None) -> str:
    """Convert an uploaded document into raw text.

    Args:
        document: The uploaded file; its extension selects the reader.
        pdf: The PDF capability resolved at startup, or None if it never loaded.

    Returns:
        The document's text.

    Raises:
        UnsupportedFormat: If the extension is not pdf, txt or md.
        DecodeError: If the payload cannot be decoded or parsed.
    """
    extension = document.extension
    if extension == "pdf":
        return _read_pdf(document, pdf)
    if extension in ("txt", "md"):
        return _read_text(document)
    raise UnsupportedFormat(extension)


def _read_text(document: UploadedDocument) -> str:
    if isinstance(document.payload, str):
        return document.payload
    try:
        return document.payload.decode(TEXT_ENCODING)
    except UnicodeDecodeError as e:
        raise DecodeError(f"Could not read {document.name} as text: {e}") from e


def _read_pdf(document: UploadedDocument, pdf: t.Optional[PdfCapability]) -> str:
    if pdf is None:
        raise DecodeError("PDF parsing library is not available.")
    if isinstance(document.payload, str):
        raise DecodeError(f"Could not parse {document.name}: expected binary PDF content.")

    logger.debug("Parsing PDF %s (%d bytes)", document.name, len(document.payload))
    try:
        return pdf.extract_pdf_text(document.payload)
    except Exception as e:
        raise DecodeError(f"Could not parse {document.name}: {e}") from e
