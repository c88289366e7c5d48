"""Turns uploaded syllabi and transcripts (PDF, plain text, markdown) into raw text."""
from .errors import DecodeError, UnsupportedFormat
from .models import UploadedDocument
from .pdf_utils import PdfCapability, load_pdf_capability
from .reader import SUPPORTED_EXTENSIONS, read_document

__all__ = [
    "DecodeError",
    "PdfCapability",
    "SUPPORTED_EXTENSIONS",
    "UnsupportedFormat",
    "UploadedDocument",
    "load_pdf_capability",
    "read_document",
]
