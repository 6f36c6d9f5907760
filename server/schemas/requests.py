"""Pydantic request models for FastAPI endpoints."""

from pydantic import BaseModel, Field


class RefreshRequest(BaseModel):
    research_question: str = Field(..., min_length=1)
    current_answer: str = Field(..., min_length=1)
    source_urls: list[str] = Field(default_factory=list)
