"""Fetchers that report "what's new" for a research question since a report was written."""

import asyncio
import random
from abc import ABC, abstractmethod
from datetime import date

from utils.logger import get_logger

from .search_provider import SearchProvider

logger = get_logger(__name__)


class ContentRefreshFetcher(ABC):
    """``fetch(question, source_urls)`` returns prose describing newly available material."""

    name: str = "base"

    @abstractmethod
    async def fetch(self, question: str, source_urls: list[str]) -> str:
        pass


class MockContentRefreshFetcher(ContentRefreshFetcher):
    """
    Simulates polling feeds: waits ``delay_s`` then returns one of three canned notes.

    Pass a seeded ``random.Random`` for deterministic selection.
    """

    name = "mock"

    def __init__(self, delay_s: float = 1.5, rng: random.Random | None = None):
        self.delay_s = delay_s
        self._rng = rng or random.Random()

    def templates(self, question: str, source_urls: list[str]) -> list[str]:
        today = date.today().isoformat()
        sources = ", ".join(source_urls)
        return [
            f'A new study published on {today} provides groundbreaking insights into topics related to "{question}". '
            "The findings challenge previous assumptions.",
            f"Recent developments in the field show an emerging trend that directly impacts the conclusions "
            f'of your research on "{question}".',
            "An expert opinion piece was just released, offering a fresh perspective that was not available "
            f"when the initial sources ({sources}) were analyzed.",
        ]

    async def fetch(self, question: str, source_urls: list[str]) -> str:
        logger.info(
            "Fetching updated content (mock)",
            extra={"extra_fields": {"question": question[:100], "source_count": len(source_urls)}},
        )
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)
        return self._rng.choice(self.templates(question, source_urls))


class SearchBackedRefreshFetcher(ContentRefreshFetcher):
    """Re-runs the web search and reports results that were not among the known sources."""

    name = "search"

    def __init__(self, search_provider: SearchProvider):
        self.search_provider = search_provider

    async def fetch(self, question: str, source_urls: list[str]) -> str:
        known = {url.strip().rstrip("/") for url in source_urls if url}
        results = await self.search_provider.search(question)
        fresh = [r for r in results if r.link.rstrip("/") not in known]

        logger.info(
            "Fetched updated content from search",
            extra={
                "extra_fields": {
                    "provider": self.search_provider.name,
                    "result_count": len(results),
                    "new_count": len(fresh),
                }
            },
        )

        if not fresh:
            return f'No new material was found for "{question}" beyond the sources already analyzed.'

        lines = [f'New material found for "{question}":']
        for idx, result in enumerate(fresh, start=1):
            lines.append(f"[{idx}] {result.title} ({result.link})")
            if result.snippet:
                lines.append(f"    {result.snippet}")
        return "\n".join(lines)
