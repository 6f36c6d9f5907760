"""Request-boundary checks. Violations never reach the research pipeline."""

from dataclasses import dataclass

from models.errors import ValidationError
from models.research import MIN_QUESTION_LENGTH, PDF_MEDIA_TYPE

MAX_FILE_SIZE = 20 * 1024 * 1024
ALLOWED_FILE_TYPES = {PDF_MEDIA_TYPE}


@dataclass(frozen=True)
class UploadSummary:
    filename: str
    size: int
    media_type: str


def validate_question(question: str | None) -> str:
    """Length is measured on the question as submitted; the stripped form is returned."""
    question = question or ""
    if len(question) < MIN_QUESTION_LENGTH or not question.strip():
        raise ValidationError("Please provide a more detailed research question.")
    return question.strip()


def validate_uploads(uploads: list[UploadSummary], *, max_file_size: int = MAX_FILE_SIZE) -> None:
    if not uploads:
        raise ValidationError("Please upload at least one document.")

    limit_mb = max_file_size // (1024 * 1024)
    for upload in uploads:
        if upload.size > max_file_size:
            raise ValidationError(f'File "{upload.filename}" exceeds the {limit_mb}MB size limit.')
        if upload.media_type not in ALLOWED_FILE_TYPES:
            raise ValidationError(f'File "{upload.filename}" is not a supported type. Please upload PDFs.')


def validate_research_submission(
    question: str | None,
    uploads: list[UploadSummary],
    *,
    max_file_size: int = MAX_FILE_SIZE,
) -> str:
    """
    Apply the submission rules in order: question length, file count, then per
    file size and media type. The first violation wins.

    Returns:
        The stripped question

    Raises:
        ValidationError: With the user-facing message
    """
    question = validate_question(question)
    validate_uploads(uploads, max_file_size=max_file_size)
    return question
