"""FastAPI dependencies for configuration, orchestrator access and upload intake."""

from fastapi import Depends, File, Form, Request, UploadFile

from config.config import Config
from models.errors import ServiceUnavailableError
from models.research import DocumentInput
from server.middleware import get_request_id
from server.validation import UploadSummary, validate_research_submission
from utils.logger import get_logger

logger = get_logger(__name__)


def get_config() -> Config:
    """Dependency to get the process-wide Config (singleton pattern)."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config()
    return get_config._instance


def get_orchestrator(config: Config = Depends(get_config)):
    """Dependency to get orchestrator instance (singleton pattern)."""
    from orchestrator.core import ResearchOrchestrator

    if not hasattr(get_orchestrator, "_instance"):
        try:
            get_orchestrator._instance = ResearchOrchestrator(config)
        except ValueError as e:
            logger.error(f"Research service is not configured: {e}")
            raise ServiceUnavailableError(f"Research service is not configured: {e}") from e
    return get_orchestrator._instance


async def read_research_submission(
    request: Request,
    question: str = Form(""),
    files: list[UploadFile] | None = File(None),
    config: Config = Depends(get_config),
) -> tuple[str, list[DocumentInput]]:
    """
    Read and validate the multipart research submission.

    Declared ahead of the orchestrator in route signatures so rejected input
    never touches the pipeline.
    """
    uploads = files or []
    documents: list[DocumentInput] = []
    summaries: list[UploadSummary] = []

    for upload in uploads:
        # read one byte past the limit so oversized files are detected without loading them whole
        content = await upload.read(config.MAX_UPLOAD_BYTES + 1)
        filename = upload.filename or "document"
        media_type = upload.content_type or "application/octet-stream"
        summaries.append(UploadSummary(filename=filename, size=len(content), media_type=media_type))
        documents.append(DocumentInput(filename=filename, content=content, media_type=media_type))

    question = validate_research_submission(question, summaries, max_file_size=config.MAX_UPLOAD_BYTES)

    logger.info(
        "Research submission accepted",
        extra={
            "extra_fields": {
                "request_id": get_request_id(request),
                "document_count": len(documents),
                "total_bytes": sum(s.size for s in summaries),
            }
        },
    )
    return question, documents
