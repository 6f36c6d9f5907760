"""Web search and refresh tools for InsightDesk."""

from .contracts import SearchProviderConfig, SearchResult
from .factory import create_refresh_fetcher, create_search_provider
from .refresh_fetcher import ContentRefreshFetcher, MockContentRefreshFetcher, SearchBackedRefreshFetcher
from .search_provider import LiveSearchProvider, MockSearchProvider, SearchProvider

__all__ = [
    "ContentRefreshFetcher",
    "LiveSearchProvider",
    "MockContentRefreshFetcher",
    "MockSearchProvider",
    "SearchBackedRefreshFetcher",
    "SearchProvider",
    "SearchProviderConfig",
    "SearchResult",
    "create_refresh_fetcher",
    "create_search_provider",
]
