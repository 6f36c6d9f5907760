"""Data contracts for the web search and refresh module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """One ranked hit from a search provider."""

    title: str
    link: str
    snippet: str = ""


@dataclass(frozen=True)
class SearchProviderConfig:
    """Selects and parameterizes a search provider. No credential means mock mode."""

    credential: str | None = None
    max_results: int = 5
    timeout_s: float = 20.0
    engine: str = "google"

    @property
    def is_live(self) -> bool:
        return bool(self.credential and self.credential.strip())
