"""Document text extraction: a placeholder extractor and a pypdf-backed PDF extractor."""

import asyncio
import io
from abc import ABC, abstractmethod

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from models.errors import CorruptDocumentError, UnsupportedFormatError
from models.research import PDF_MEDIA_TYPE, DocumentInput
from utils.logger import get_logger

logger = get_logger(__name__)

MOCK_PREFIX_CHARS = 50


class DocumentTextExtractor(ABC):
    """``extract(document)`` returns the document's plain text."""

    name: str = "base"

    @abstractmethod
    async def extract(self, document: DocumentInput) -> str:
        pass


class MockTextExtractor(DocumentTextExtractor):
    """Returns a placeholder derived from the start of the document's data URI."""

    name = "mock"

    async def extract(self, document: DocumentInput) -> str:
        data_uri = document.to_data_uri()
        logger.info(
            "MOCK: Extracting text from document",
            extra={"extra_fields": {"filename": document.filename, "size": document.size}},
        )
        return f"MOCK EXTRACTED TEXT FROM {data_uri[:MOCK_PREFIX_CHARS]}..."


class PdfTextExtractor(DocumentTextExtractor):
    """
    Extracts page text with pypdf.

    Parsing is CPU-bound and runs in a worker thread so concurrent extractions
    do not block the event loop.
    """

    name = "pdf"

    def __init__(self, max_chars: int = 60000):
        self.max_chars = max_chars

    async def extract(self, document: DocumentInput) -> str:
        if document.media_type != PDF_MEDIA_TYPE:
            raise UnsupportedFormatError(
                f'File "{document.filename}" has unsupported type {document.media_type!r}; only PDF is supported.',
                filename=document.filename,
            )

        text = await asyncio.to_thread(self._extract_sync, document)
        logger.info(
            "Extracted text from PDF",
            extra={"extra_fields": {"filename": document.filename, "chars": len(text)}},
        )
        return text

    def _extract_sync(self, document: DocumentInput) -> str:
        try:
            reader = PdfReader(io.BytesIO(document.content))
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PdfReadError, ValueError, TypeError, KeyError, OSError) as e:
            logger.warning(
                "PDF parsing failed",
                extra={"extra_fields": {"filename": document.filename, "error": str(e)}},
            )
            raise CorruptDocumentError(
                f'File "{document.filename}" could not be parsed as a PDF: {e}',
                filename=document.filename,
            ) from e

        text = "\n\n".join(page.strip() for page in pages if page.strip())
        if len(text) > self.max_chars:
            text = text[: self.max_chars].rstrip() + "..."
        return text


def create_document_extractor(mode: str, *, max_chars: int = 60000) -> DocumentTextExtractor:
    """
    Args:
        mode: "mock" or "pdf"
        max_chars: Cap on extracted characters per document (pdf mode)

    Raises:
        ValueError: If mode is unknown
    """
    mode = (mode or "mock").lower().strip()
    if mode == "mock":
        return MockTextExtractor()
    if mode == "pdf":
        return PdfTextExtractor(max_chars=max_chars)
    raise ValueError(f"Unsupported DOCUMENT_EXTRACTOR_MODE: {mode}")
