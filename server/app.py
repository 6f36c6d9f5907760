"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models.errors import (
    DocumentError,
    ResearchError,
    ServiceUnavailableError,
    UpstreamError,
    ValidationError,
)
from server.dependencies import get_config
from server.middleware import RequestIDMiddleware, get_request_id
from server.routes import health, refresh, research
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("FastAPI server starting up")
    config = get_config()
    if not config.validate():
        logger.warning("Configuration incomplete; research endpoints will return 503 until it is fixed")

    yield

    logger.info("FastAPI server shutting down")


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "request_id": get_request_id(request)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map pipeline failures to a single {"error": message} body."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "Request rejected at boundary",
            extra={"extra_fields": {"request_id": get_request_id(request), "reason": str(exc)}},
        )
        return _error_response(request, status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(DocumentError)
    async def handle_document_error(request: Request, exc: DocumentError):
        logger.warning(
            "Document extraction failed",
            extra={"extra_fields": {"request_id": get_request_id(request), "filename": exc.filename}},
        )
        return _error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        logger.error(
            "Research pipeline failed",
            exc_info=exc,
            extra={"extra_fields": {"request_id": get_request_id(request), "source": exc.source}},
        )
        return _error_response(request, status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(ServiceUnavailableError)
    async def handle_service_unavailable(request: Request, exc: ServiceUnavailableError):
        logger.error(
            "Research service unavailable",
            extra={"extra_fields": {"request_id": get_request_id(request), "reason": str(exc)}},
        )
        return _error_response(request, status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))

    @app.exception_handler(ResearchError)
    async def handle_research_error(request: Request, exc: ResearchError):
        logger.error(
            "Unexpected research error",
            exc_info=exc,
            extra={"extra_fields": {"request_id": get_request_id(request)}},
        )
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) or "An unexpected error occurred while generating the report.",
        )


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="InsightDesk API",
        description="Research reports from PDFs and web search, with on-demand refresh",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(research.router)
    app.include_router(refresh.router)

    return app
