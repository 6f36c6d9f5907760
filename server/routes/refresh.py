"""POST /v1/refresh: check for new information and revise a report summary if warranted."""

from fastapi import APIRouter, Depends, Request

from orchestrator.core import ResearchOrchestrator
from server.dependencies import get_orchestrator
from server.middleware import get_request_id
from server.schemas.requests import RefreshRequest
from server.schemas.responses import ErrorResponseDTO, RefreshResponseDTO

router = APIRouter(prefix="/v1", tags=["Refresh"])


@router.post(
    "/refresh",
    response_model=RefreshResponseDTO,
    responses={502: {"model": ErrorResponseDTO}},
)
async def refresh_report(
    body: RefreshRequest,
    request: Request,
    orchestrator: ResearchOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.refresh_answer(
        body.research_question,
        body.current_answer,
        body.source_urls,
    )
    return RefreshResponseDTO(request_id=get_request_id(request), data=result)
