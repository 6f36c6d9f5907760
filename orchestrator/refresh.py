"""
AnswerRefreshEngine - decides whether new information should revise a report summary.

One structured model call returns ``{needs_update, updated_answer}``. A negative
decision always hands back the caller's answer untouched.
"""

from models.errors import ResearchError, UpstreamError
from models.research import RefreshDecision, RefreshResult
from orchestrator.structured_output import StructuredOutputRunner
from tools.web.refresh_fetcher import ContentRefreshFetcher
from tools.web.research_pack import build_refresh_prompt
from utils.logger import get_logger

logger = get_logger(__name__)


def resolve_refresh(current_answer: str, decision: RefreshDecision) -> RefreshResult:
    """Collapse the model's decision into the result the caller merges into its report."""
    candidate = (decision.updated_answer or "").strip()
    if decision.needs_update and candidate and candidate != current_answer.strip():
        return RefreshResult(updated_answer=decision.updated_answer, is_updated=True)
    return RefreshResult(updated_answer=current_answer, is_updated=False)


class AnswerRefreshEngine:
    def __init__(self, fetcher: ContentRefreshFetcher, runner: StructuredOutputRunner):
        self.fetcher = fetcher
        self.runner = runner

    async def refresh(
        self,
        question: str,
        current_answer: str,
        source_urls: list[str] | None = None,
    ) -> RefreshResult:
        """
        Args:
            question: Original research question (or question context)
            current_answer: The report summary as the caller currently holds it
            source_urls: Sources the current answer was built from

        Returns:
            RefreshResult; ``is_updated`` is False when no revision is warranted

        Raises:
            UpstreamError: Fetch or model failure (SchemaViolationError included)
        """
        source_urls = list(source_urls or [])
        new_information = await self._fetch(question, source_urls)

        prompt = build_refresh_prompt(question, current_answer, source_urls, new_information)
        decision = await self.runner.run(prompt, RefreshDecision, caller="refresh")
        result = resolve_refresh(current_answer, decision)

        logger.info(
            "Refresh decision",
            extra={
                "extra_fields": {
                    "fetcher": self.fetcher.name,
                    "needs_update": decision.needs_update,
                    "is_updated": result.is_updated,
                    "source_count": len(source_urls),
                }
            },
        )
        return result

    async def _fetch(self, question: str, source_urls: list[str]) -> str:
        try:
            return await self.fetcher.fetch(question, source_urls)
        except ResearchError:
            raise
        except Exception as e:
            logger.error("Fetching updated content failed", exc_info=True)
            raise UpstreamError(f"Fetching updated content failed: {e}", source="fetcher") from e
