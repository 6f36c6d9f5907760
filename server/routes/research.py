"""POST /v1/research: build a research report from a question and PDF uploads."""

from fastapi import APIRouter, Depends, Request

from models.research import DocumentInput
from orchestrator.core import ResearchOrchestrator
from server.dependencies import get_orchestrator, read_research_submission
from server.middleware import get_request_id
from server.schemas.responses import ErrorResponseDTO, ResearchResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Research"])


@router.post(
    "/research",
    response_model=ResearchResponseDTO,
    responses={400: {"model": ErrorResponseDTO}, 422: {"model": ErrorResponseDTO}, 502: {"model": ErrorResponseDTO}},
)
async def create_report(
    request: Request,
    submission: tuple[str, list[DocumentInput]] = Depends(read_research_submission),
    orchestrator: ResearchOrchestrator = Depends(get_orchestrator),
):
    """
    Extract the uploaded PDFs, augment with web search and return the synthesized report.

    Core failures propagate to the app-level exception handlers.
    """
    question, documents = submission
    request_id = get_request_id(request)

    outcome = await orchestrator.generate_report(question, documents)

    logger.info(
        "Report generated",
        extra={
            "extra_fields": {
                "request_id": request_id,
                "takeaways": len(outcome.report.key_takeaways),
                "sources": len(outcome.report.sources),
                "unverified_sources": len(outcome.unverified_sources),
            }
        },
    )
    return ResearchResponseDTO.from_outcome(outcome, request_id)
