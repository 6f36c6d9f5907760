import pytest

from config.config import Config

pytestmark = pytest.mark.unit


def test_defaults():
    config = Config()

    assert config.MODEL_TYPE == "gemini"
    assert config.DEFAULT_MODEL == "gemini-2.5-flash"
    assert config.SERPAPI_KEY is None
    assert config.SEARCH_MAX_RESULTS == 5
    assert config.DOCUMENT_EXTRACTOR_MODE == "mock"
    assert config.REFRESH_FETCHER_MODE == "mock"
    assert config.REFRESH_FETCH_DELAY_SECONDS == 1.5
    assert config.STRUCTURED_OUTPUT_MAX_ATTEMPTS == 2
    assert config.MAX_UPLOAD_BYTES == 20 * 1024 * 1024


def test_validate_requires_selected_provider_key(mock_env, monkeypatch):
    assert Config().validate() is True

    monkeypatch.delenv("GOOGLE_GEMINI_API_KEY")
    assert Config().validate() is False


def test_validate_openai(monkeypatch):
    monkeypatch.setenv("MODEL_TYPE", "OpenAI")
    assert Config().validate() is False

    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    config = Config()
    assert config.validate() is True
    assert config.DEFAULT_MODEL == "gpt-4o-mini"
    assert config.get_model_info() == "OpenAI (gpt-4o-mini)"


def test_validate_rejects_unknown_modes(mock_env, monkeypatch):
    monkeypatch.setenv("MODEL_TYPE", "llama")
    assert Config().validate() is False

    monkeypatch.setenv("MODEL_TYPE", "gemini")
    monkeypatch.setenv("DOCUMENT_EXTRACTOR_MODE", "ocr")
    assert Config().validate() is False


def test_missing_search_key_is_not_an_error(mock_env):
    config = Config()
    assert config.validate() is True
    assert config.search_provider_config().is_live is False


def test_search_settings(monkeypatch):
    monkeypatch.setenv("SERPAPI_KEY", "serp-key")
    monkeypatch.setenv("SEARCH_MAX_RESULTS", "50")

    search = Config().search_provider_config()
    assert search.is_live is True
    assert search.credential == "serp-key"
    assert search.max_results == 5


def test_blank_search_key_means_mock(monkeypatch):
    monkeypatch.setenv("SERPAPI_KEY", "   ")
    assert Config().SERPAPI_KEY is None


def test_invalid_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("STRUCTURED_OUTPUT_MAX_ATTEMPTS", "many")
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "")

    config = Config()
    assert config.STRUCTURED_OUTPUT_MAX_ATTEMPTS == 2
    assert config.MAX_UPLOAD_BYTES == 20 * 1024 * 1024
