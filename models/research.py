"""Research pipeline data model: inputs, intermediate artifacts and model output schemas."""

import base64
import binascii
import re
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from models.errors import ValidationError

MIN_QUESTION_LENGTH = 10
PDF_MEDIA_TYPE = "application/pdf"

_DATA_URI_RE = re.compile(r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.S)


@dataclass(frozen=True)
class DocumentInput:
    """An uploaded document, consumed once by the extractor."""

    filename: str
    content: bytes
    media_type: str = PDF_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.content)

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"

    @classmethod
    def from_data_uri(cls, filename: str, data_uri: str) -> "DocumentInput":
        """Decode a ``data:<mime>;base64,<payload>`` string into a document."""
        match = _DATA_URI_RE.match(data_uri or "")
        if not match:
            raise ValidationError(f'File "{filename}" is not a valid base64 data URI.')
        try:
            content = base64.b64decode(match.group("payload"), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(f'File "{filename}" has an invalid base64 payload.') from e
        return cls(filename=filename, content=content, media_type=match.group("media_type"))


@dataclass(frozen=True)
class ExtractedDocument:
    filename: str
    text: str


class Report(BaseModel):
    """Structured research report. Also the output schema handed to the model."""

    key_takeaways: list[str] = Field(
        ...,
        min_length=1,
        description="Discrete key takeaways extracted from the documents and web sources.",
    )
    summary: str = Field(
        ...,
        min_length=1,
        description="A multi-paragraph synthesized summary of the findings.",
    )
    sources: list[str] = Field(
        ...,
        description="Every document filename and URL actually used to write the report.",
    )

    @field_validator("key_takeaways")
    @classmethod
    def takeaways_not_blank(cls, value: list[str]) -> list[str]:
        if any(not item.strip() for item in value):
            raise ValueError("key_takeaways must not contain blank entries")
        return value

    @field_validator("summary")
    @classmethod
    def summary_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("summary must not be blank")
        return value


class RefreshDecision(BaseModel):
    """Model output schema for the refresh call."""

    needs_update: bool = Field(
        ..., description="True only if the new information significantly improves the answer."
    )
    updated_answer: str = Field(
        ...,
        description="The revised answer when needs_update is true, otherwise the current answer unchanged.",
    )


class RefreshResult(BaseModel):
    updated_answer: str
    is_updated: bool
