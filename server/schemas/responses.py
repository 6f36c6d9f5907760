"""Pydantic response models (DTOs) for FastAPI endpoints."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from models.research import RefreshResult, Report


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ErrorResponseDTO(BaseModel):
    error: str
    request_id: str = "unknown"


class SearchResultDTO(BaseModel):
    title: str
    link: str
    snippet: str = ""


class ResearchResponseDTO(BaseModel):
    request_id: str
    data: Report
    unverified_sources: list[str] = Field(default_factory=list)
    web_results: list[SearchResultDTO] = Field(default_factory=list)
    latency_ms: int = 0
    timestamp: str = Field(default_factory=_utc_timestamp)

    @classmethod
    def from_outcome(cls, outcome, request_id: str):
        """Convert SynthesisOutcome to DTO."""
        return cls(
            request_id=request_id,
            data=outcome.report,
            unverified_sources=outcome.unverified_sources,
            web_results=[
                SearchResultDTO(title=r.title, link=r.link, snippet=r.snippet)
                for r in outcome.search_results
            ],
            latency_ms=outcome.latency_ms,
        )


class RefreshResponseDTO(BaseModel):
    request_id: str
    data: RefreshResult
    timestamp: str = Field(default_factory=_utc_timestamp)


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
