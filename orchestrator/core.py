"""
ResearchOrchestrator - business layer behind the HTTP API and the CLI.

Builds the synthesis and refresh engines from configuration and exposes the two
operations the presentation layer calls. Collaborators can be injected, which
is how tests run the whole pipeline offline.
"""

from api.base_client import BaseAIClient
from config.config import Config
from models.research import DocumentInput, RefreshResult
from orchestrator.refresh import AnswerRefreshEngine
from orchestrator.structured_output import StructuredOutputPolicy, StructuredOutputRunner
from orchestrator.synthesis import ReportSynthesisEngine, SynthesisOutcome
from tools.documents.extractor import DocumentTextExtractor, create_document_extractor
from tools.web.factory import create_refresh_fetcher, create_search_provider
from tools.web.refresh_fetcher import ContentRefreshFetcher
from tools.web.search_provider import SearchProvider
from utils.logger import get_logger

logger = get_logger(__name__)


class ResearchOrchestrator:
    def __init__(
        self,
        config: Config | None = None,
        *,
        llm_client: BaseAIClient | None = None,
        search_provider: SearchProvider | None = None,
        extractor: DocumentTextExtractor | None = None,
        fetcher: ContentRefreshFetcher | None = None,
    ):
        self.config = config or Config()

        if llm_client is None:
            from api.factory import create_llm_client

            llm_client = create_llm_client(self.config)

        self.search_provider = search_provider or create_search_provider(self.config.search_provider_config())
        self.extractor = extractor or create_document_extractor(
            self.config.DOCUMENT_EXTRACTOR_MODE, max_chars=self.config.MAX_DOCUMENT_CHARS
        )
        self.fetcher = fetcher or create_refresh_fetcher(
            self.config.REFRESH_FETCHER_MODE,
            self.search_provider,
            delay_s=self.config.REFRESH_FETCH_DELAY_SECONDS,
        )

        runner = StructuredOutputRunner(
            llm_client,
            StructuredOutputPolicy(
                max_attempts=self.config.STRUCTURED_OUTPUT_MAX_ATTEMPTS,
                timeout_s=self.config.LLM_TIMEOUT_SECONDS,
            ),
        )
        self.synthesis_engine = ReportSynthesisEngine(self.extractor, self.search_provider, runner)
        self.refresh_engine = AnswerRefreshEngine(self.fetcher, runner)

        logger.info(
            "Research orchestrator initialized",
            extra={
                "extra_fields": {
                    "provider": llm_client.provider_name,
                    "model": llm_client.model_name,
                    "search": self.search_provider.name,
                    "extractor": self.extractor.name,
                    "fetcher": self.fetcher.name,
                }
            },
        )

    async def generate_report(self, question: str, documents: list[DocumentInput]) -> SynthesisOutcome:
        return await self.synthesis_engine.run(question, documents)

    async def refresh_answer(
        self, question: str, current_answer: str, source_urls: list[str] | None = None
    ) -> RefreshResult:
        return await self.refresh_engine.refresh(question, current_answer, source_urls)
