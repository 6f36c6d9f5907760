"""
ReportSynthesisEngine - turns a research question plus documents into a Report.

Pipeline:
1. Extract text from every document and run the web search, concurrently.
   All-or-nothing: the first failure cancels the remaining tasks and propagates.
2. Assemble one prompt from the question, documents and search results.
3. Ask the model for a Report-shaped JSON reply and validate it.
4. Audit cited sources against the inputs and log anything unverified.
"""

import asyncio
import time
from dataclasses import dataclass, field

from models.errors import ResearchError, UpstreamError
from models.research import DocumentInput, ExtractedDocument, Report
from orchestrator.provenance import find_unverified_sources
from orchestrator.structured_output import StructuredOutputRunner
from tools.documents.extractor import DocumentTextExtractor
from tools.web.contracts import SearchResult
from tools.web.research_pack import build_synthesis_prompt
from tools.web.search_provider import SearchProvider
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SynthesisOutcome:
    report: Report
    documents: list[ExtractedDocument] = field(default_factory=list)
    search_results: list[SearchResult] = field(default_factory=list)
    unverified_sources: list[str] = field(default_factory=list)
    latency_ms: int = 0


class ReportSynthesisEngine:
    def __init__(
        self,
        extractor: DocumentTextExtractor,
        search_provider: SearchProvider,
        runner: StructuredOutputRunner,
    ):
        self.extractor = extractor
        self.search_provider = search_provider
        self.runner = runner

    async def synthesize(self, question: str, documents: list[DocumentInput]) -> Report:
        """Build the report for ``question``; see ``run`` for the full outcome."""
        outcome = await self.run(question, documents)
        return outcome.report

    async def run(self, question: str, documents: list[DocumentInput]) -> SynthesisOutcome:
        """
        Args:
            question: Research question, already validated by the caller
            documents: Uploaded documents in submission order

        Returns:
            SynthesisOutcome with the validated report and the inputs it was built from

        Raises:
            DocumentError: A document could not be extracted
            UpstreamError: Search or model failure (SchemaViolationError included)
        """
        start = time.perf_counter()
        logger.info(
            "Report synthesis started",
            extra={"extra_fields": {"question": question[:100], "document_count": len(documents)}},
        )

        extracted, search_results = await self._gather_inputs(question, documents)

        prompt = build_synthesis_prompt(question, extracted, search_results)
        report = await self.runner.run(prompt, Report, caller="synthesis")

        unverified = find_unverified_sources(report, extracted, search_results)
        if unverified:
            logger.warning(
                "Report cites sources that were not provided to the model",
                extra={"extra_fields": {"unverified_sources": unverified}},
            )

        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "Report synthesis complete",
            extra={
                "extra_fields": {
                    "takeaways": len(report.key_takeaways),
                    "sources": len(report.sources),
                    "search_results": len(search_results),
                    "latency_ms": latency_ms,
                }
            },
        )
        return SynthesisOutcome(
            report=report,
            documents=list(extracted),
            search_results=list(search_results),
            unverified_sources=unverified,
            latency_ms=latency_ms,
        )

    async def _gather_inputs(
        self, question: str, documents: list[DocumentInput]
    ) -> tuple[list[ExtractedDocument], list[SearchResult]]:
        # search has no data dependency on extraction, so it joins the same fan-out
        tasks = [asyncio.create_task(self._extract(doc)) for doc in documents]
        tasks.append(asyncio.create_task(self._search(question)))

        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return list(results[:-1]), results[-1]

    async def _extract(self, document: DocumentInput) -> ExtractedDocument:
        try:
            text = await self.extractor.extract(document)
        except ResearchError:
            raise
        except Exception as e:
            logger.error(
                "Document extraction failed",
                exc_info=True,
                extra={"extra_fields": {"filename": document.filename}},
            )
            raise UpstreamError(
                f'Failed to extract text from "{document.filename}": {e}', source="extractor"
            ) from e
        return ExtractedDocument(filename=document.filename, text=text)

    async def _search(self, question: str) -> list[SearchResult]:
        try:
            return await self.search_provider.search(question)
        except ResearchError:
            raise
        except Exception as e:
            logger.error("Web search failed", exc_info=True)
            raise UpstreamError(f"Web search failed: {e}", source="search") from e
