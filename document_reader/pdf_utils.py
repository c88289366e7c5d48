# -*- coding: utf-8 -*-
import importlib
import io
import logging
import typing as t

logger = logging.getLogger(__name__)


class PdfCapability:
    """Text extraction backed by a pdfplumber-compatible module.

    Resolved once at startup by :func:`load_pdf_capability` and handed to the
    reader by reference.
    """

    def __init__(self, backend: t.Any) -> None:
        self._backend = backend

    def extract_pdf_pages(self, payload: bytes) -> list[str]:
        """
        Extracts the text of every page, in page order.
        Words are joined with single spaces in the order the parser reports
        them; visual layout is not reconstructed.
        :param payload: Raw bytes of a PDF document.
        :return: One string per page (empty for pages without text).
        """
        pages: list[str] = []
        with self._backend.open(io.BytesIO(payload)) as pdf:
            for page in pdf.pages:
                words = page.extract_words()
                pages.append(" ".join(word["text"] for word in words))
        return pages

    def extract_pdf_text(self, payload: bytes) -> str:
        """Extracts all pages and separates them with a blank line."""
        return "\n\n".join(self.extract_pdf_pages(payload))


def load_pdf_capability(module_name: str = "pdfplumber") -> t.Optional[PdfCapability]:
    """Resolve the PDF parsing library.

    :param module_name: Importable name of the parsing library.
    :return: A PdfCapability, or None when the library cannot be loaded.
    """
    try:
        backend = importlib.import_module(module_name)
    except ImportError as e:
        logger.warning("PDF support unavailable, could not load %s: %s", module_name, e)
        return None
    logger.debug("Loaded PDF parsing library %s", module_name)
    return PdfCapability(backend)
