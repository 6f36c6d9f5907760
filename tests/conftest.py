import pytest

from tests.fakes import FakeFetcher, FakeSearchProvider, mock_search_results

CONFIG_ENV_VARS = (
    "MODEL_TYPE",
    "GOOGLE_GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "SERPAPI_KEY",
    "SEARCH_MAX_RESULTS",
    "DOCUMENT_EXTRACTOR_MODE",
    "REFRESH_FETCHER_MODE",
    "STRUCTURED_OUTPUT_MAX_ATTEMPTS",
    "MAX_UPLOAD_BYTES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer .env / shell settings out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_env(monkeypatch):
    """Fixture to mock environment variables for a configured Gemini deployment."""
    env_vars = {
        "MODEL_TYPE": "gemini",
        "GOOGLE_GEMINI_API_KEY": "test-api-key",
        "DEFAULT_GEMINI_MODEL": "gemini-2.5-flash",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def fake_search():
    return FakeSearchProvider(results=mock_search_results())


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def report_reply():
    return {
        "key_takeaways": ["Microplastics accumulate in filter feeders."],
        "summary": "Microplastics are widespread in marine ecosystems.\n\nThey affect feeding and reproduction.",
        "sources": ["study.pdf", "https://example.com/result1"],
    }
