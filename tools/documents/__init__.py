"""Document text extraction for uploaded research files."""

from .extractor import (
    DocumentTextExtractor,
    MockTextExtractor,
    PdfTextExtractor,
    create_document_extractor,
)

__all__ = ["DocumentTextExtractor", "MockTextExtractor", "PdfTextExtractor", "create_document_extractor"]
