import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from tools.web.contracts import SearchProviderConfig
from utils.logger import get_logger

logger = get_logger(__name__)

MAX_SEARCH_RESULTS = 5


class ModelType(Enum):
    """Supported model providers."""
    GEMINI = "gemini"
    OPENAI = "openai"


class ExtractorMode(Enum):
    MOCK = "mock"
    PDF = "pdf"


class FetcherMode(Enum):
    MOCK = "mock"
    SEARCH = "search"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}={raw!r}; using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {name}={raw!r}; using {default}")
        return default


class Config:
    """Configuration management for the application."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Model configuration
        self.MODEL_TYPE = os.getenv("MODEL_TYPE", ModelType.GEMINI.value).lower().strip()
        self.GOOGLE_GEMINI_API_KEY = os.getenv("GOOGLE_GEMINI_API_KEY")
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.DEFAULT_GEMINI_MODEL = os.getenv("DEFAULT_GEMINI_MODEL", "gemini-2.5-flash")
        self.DEFAULT_OPENAI_MODEL = os.getenv("DEFAULT_OPENAI_MODEL", "gpt-4o-mini")
        self.LLM_TEMPERATURE = _env_float("LLM_TEMPERATURE", 0.3)
        self.LLM_TIMEOUT_SECONDS = _env_float("LLM_TIMEOUT_SECONDS", 120.0)
        self.STRUCTURED_OUTPUT_MAX_ATTEMPTS = max(1, _env_int("STRUCTURED_OUTPUT_MAX_ATTEMPTS", 2))

        # Web search (absent key means mock mode, not an error)
        self.SERPAPI_KEY = (os.getenv("SERPAPI_KEY") or "").strip() or None
        self.SEARCH_MAX_RESULTS = min(max(_env_int("SEARCH_MAX_RESULTS", MAX_SEARCH_RESULTS), 1), MAX_SEARCH_RESULTS)
        self.SEARCH_TIMEOUT_SECONDS = _env_float("SEARCH_TIMEOUT_SECONDS", 20.0)

        # Documents
        self.DOCUMENT_EXTRACTOR_MODE = os.getenv("DOCUMENT_EXTRACTOR_MODE", ExtractorMode.MOCK.value).lower().strip()
        self.MAX_DOCUMENT_CHARS = _env_int("MAX_DOCUMENT_CHARS", 60000)
        self.MAX_UPLOAD_BYTES = _env_int("MAX_UPLOAD_BYTES", 20 * 1024 * 1024)

        # Refresh
        self.REFRESH_FETCHER_MODE = os.getenv("REFRESH_FETCHER_MODE", FetcherMode.MOCK.value).lower().strip()
        self.REFRESH_FETCH_DELAY_SECONDS = _env_float("REFRESH_FETCH_DELAY_SECONDS", 1.5)

    @property
    def DEFAULT_MODEL(self) -> str:
        if self.MODEL_TYPE == ModelType.OPENAI.value:
            return self.DEFAULT_OPENAI_MODEL
        return self.DEFAULT_GEMINI_MODEL

    def validate(self) -> bool:
        """
        Validate that the configuration needed by the selected providers is present.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        if self.MODEL_TYPE == ModelType.GEMINI.value:
            if not self.GOOGLE_GEMINI_API_KEY:
                logger.error("GOOGLE_GEMINI_API_KEY is not set")
                return False
        elif self.MODEL_TYPE == ModelType.OPENAI.value:
            if not self.OPENAI_API_KEY:
                logger.error("OPENAI_API_KEY is not set")
                return False
        else:
            logger.error(
                f"Unknown MODEL_TYPE '{self.MODEL_TYPE}'. Must be one of: {', '.join(e.value for e in ModelType)}"
            )
            return False

        if self.DOCUMENT_EXTRACTOR_MODE not in {e.value for e in ExtractorMode}:
            logger.error(f"Unknown DOCUMENT_EXTRACTOR_MODE '{self.DOCUMENT_EXTRACTOR_MODE}'")
            return False
        if self.REFRESH_FETCHER_MODE not in {e.value for e in FetcherMode}:
            logger.error(f"Unknown REFRESH_FETCHER_MODE '{self.REFRESH_FETCHER_MODE}'")
            return False

        if not self.SERPAPI_KEY:
            logger.warning("SERPAPI_KEY is not set; web search runs in mock mode")
        return True

    def search_provider_config(self) -> SearchProviderConfig:
        return SearchProviderConfig(
            credential=self.SERPAPI_KEY,
            max_results=self.SEARCH_MAX_RESULTS,
            timeout_s=self.SEARCH_TIMEOUT_SECONDS,
        )

    def get_model_info(self) -> str:
        if self.MODEL_TYPE == ModelType.OPENAI.value:
            return f"OpenAI ({self.DEFAULT_MODEL})"
        if self.MODEL_TYPE == ModelType.GEMINI.value:
            return f"Google Gemini ({self.DEFAULT_MODEL})"
        return "Unknown"
