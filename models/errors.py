"""Exception hierarchy shared by the research pipeline and the HTTP layer."""


class ResearchError(Exception):
    """Base class for every failure the pipeline reports to its caller."""


class ValidationError(ResearchError):
    """Input rejected at the request boundary (question, file count, size, type)."""


class UpstreamError(ResearchError):
    """A collaborator (model, search provider, fetcher) failed irrecoverably."""

    def __init__(self, message: str, *, source: str = "unknown"):
        super().__init__(message)
        self.source = source


class SchemaViolationError(UpstreamError):
    """The model's structured output did not match the declared schema."""

    def __init__(self, message: str, *, schema: str, raw_text: str = ""):
        super().__init__(message, source="model")
        self.schema = schema
        self.raw_text = raw_text


class DocumentError(ResearchError):
    """Text could not be extracted from an uploaded document."""

    def __init__(self, message: str, *, filename: str = ""):
        super().__init__(message)
        self.filename = filename


class UnsupportedFormatError(DocumentError):
    pass


class CorruptDocumentError(DocumentError):
    pass


class ServiceUnavailableError(ResearchError):
    """The service cannot build its collaborators from the current configuration."""
