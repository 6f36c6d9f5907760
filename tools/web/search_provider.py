"""Web search providers: a deterministic offline mock and a live SerpAPI client."""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from models.errors import UpstreamError
from utils.logger import get_logger

from .contracts import SearchProviderConfig, SearchResult

logger = get_logger(__name__)

SERPAPI_SEARCH_URL = "https://serpapi.com/search.json"


class SearchProvider(ABC):
    """Capability interface: ``search(query)`` returns ranked results, at most five."""

    name: str = "base"

    @abstractmethod
    async def search(self, query: str) -> list[SearchResult]:
        pass


class MockSearchProvider(SearchProvider):
    """
    Used when no search credential is configured.

    Always returns the same two results; only the first snippet mentions the query.
    """

    name = "mock"

    async def search(self, query: str) -> list[SearchResult]:
        logger.warning(
            "SERPAPI_KEY is not set. Using mock search results.",
            extra={"extra_fields": {"query": query[:100]}},
        )
        return [
            SearchResult(
                title="Mock Search Result 1",
                link="https://example.com/result1",
                snippet=f"This is a mock search result snippet for the query: {query}",
            ),
            SearchResult(
                title="Mock Search Result 2",
                link="https://example.com/result2",
                snippet="Another mock result to show how web search integrates with the research.",
            ),
        ]


class LiveSearchProvider(SearchProvider):
    """
    SerpAPI-backed Google search.

    Provider ranking order is preserved and the list is cut to ``max_results``.
    Transport failures and provider-reported errors raise UpstreamError.
    """

    name = "serpapi"

    def __init__(self, config: SearchProviderConfig, transport: httpx.AsyncBaseTransport | None = None):
        """
        Args:
            config: Search configuration; ``credential`` must be set
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        if not config.credential:
            raise ValueError("LiveSearchProvider requires a search credential")
        self.config = config
        self._transport = transport

    async def search(self, query: str) -> list[SearchResult]:
        params = {
            "q": query,
            "engine": self.config.engine,
            "api_key": self.config.credential,
        }
        logger.info(
            "SerpAPI search",
            extra={"extra_fields": {"query": query[:100], "max_results": self.config.max_results}},
        )

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_s, transport=self._transport) as client:
                response = await client.get(SERPAPI_SEARCH_URL, params=params)
                payload = response.json() if response.content else {}
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "SerpAPI request failed",
                extra={"extra_fields": {"error": str(e), "error_type": type(e).__name__}},
            )
            raise UpstreamError(f"Web search failed: {e}", source="search") from e

        if not isinstance(payload, dict):
            raise UpstreamError("Web search returned an unexpected payload", source="search")

        if payload.get("error"):
            raise UpstreamError(str(payload["error"]), source="search")

        if response.status_code >= 400:
            raise UpstreamError(
                f"Web search failed with HTTP {response.status_code}", source="search"
            )

        results = _map_organic_results(payload, self.config.max_results)
        logger.info(f"SerpAPI returned {len(results)} results")
        return results


def _map_organic_results(payload: dict[str, Any], max_results: int) -> list[SearchResult]:
    results: list[SearchResult] = []
    organic = payload.get("organic_results") or []
    if not isinstance(organic, list):
        return results
    for item in organic:
        if not isinstance(item, dict):
            continue
        link = str(item.get("link") or "").strip()
        if not link:
            continue
        results.append(
            SearchResult(
                title=str(item.get("title") or "").strip() or link,
                link=link,
                snippet=str(item.get("snippet") or "").strip(),
            )
        )
        if len(results) >= max_results:
            break
    return results
