"""
Models package for the research pipeline.
"""

from .errors import (
    CorruptDocumentError,
    DocumentError,
    ResearchError,
    SchemaViolationError,
    ServiceUnavailableError,
    UnsupportedFormatError,
    UpstreamError,
    ValidationError,
)
from .generation import GenerationResult, TokenUsage
from .research import (
    DocumentInput,
    ExtractedDocument,
    RefreshDecision,
    RefreshResult,
    Report,
)

__all__ = [
    "CorruptDocumentError",
    "DocumentError",
    "DocumentInput",
    "ExtractedDocument",
    "GenerationResult",
    "RefreshDecision",
    "RefreshResult",
    "Report",
    "ResearchError",
    "SchemaViolationError",
    "ServiceUnavailableError",
    "TokenUsage",
    "UnsupportedFormatError",
    "UpstreamError",
    "ValidationError",
]
