"""Factories that turn configuration into search providers and refresh fetchers."""

from utils.logger import get_logger

from .contracts import SearchProviderConfig
from .refresh_fetcher import (
    ContentRefreshFetcher,
    MockContentRefreshFetcher,
    SearchBackedRefreshFetcher,
)
from .search_provider import LiveSearchProvider, MockSearchProvider, SearchProvider

logger = get_logger(__name__)


def create_search_provider(config: SearchProviderConfig) -> SearchProvider:
    """
    Select the search provider from configuration, never from ambient process state.

    Returns:
        LiveSearchProvider when a credential is configured, MockSearchProvider otherwise
    """
    if config.is_live:
        logger.info("Using SerpAPI for web search")
        return LiveSearchProvider(config)

    logger.warning("No search credential configured; web search runs in mock mode")
    return MockSearchProvider()


def create_refresh_fetcher(
    mode: str,
    search_provider: SearchProvider,
    *,
    delay_s: float = 1.5,
) -> ContentRefreshFetcher:
    """
    Args:
        mode: "mock" or "search"
        search_provider: Provider reused by the search-backed fetcher
        delay_s: Simulated latency for the mock fetcher

    Raises:
        ValueError: If mode is unknown
    """
    mode = (mode or "mock").lower().strip()
    if mode == "mock":
        return MockContentRefreshFetcher(delay_s=delay_s)
    if mode == "search":
        return SearchBackedRefreshFetcher(search_provider)
    raise ValueError(f"Unsupported REFRESH_FETCHER_MODE: {mode}")
