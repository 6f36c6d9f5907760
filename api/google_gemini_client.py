import time
from typing import Any

from google import genai
from pydantic import BaseModel

from models.errors import UpstreamError
from models.generation import GenerationResult, TokenUsage
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)

_FINISH_REASONS = {
    "STOP": "stop",
    "MAX_TOKENS": "length",
    "SAFETY": "content_filter",
    "RECITATION": "content_filter",
    "BLOCKLIST": "content_filter",
    "PROHIBITED_CONTENT": "content_filter",
}


class GeminiClient(BaseAIClient):
    """
    A client for the Google Gemini API using the google.genai package.

    Structured requests use Gemini's native JSON mode with the pydantic model
    passed as ``response_schema``.
    """

    provider_name = "gemini"

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash", **kwargs):
        """
        Args:
            api_key: The Google Gemini API key
            model_name: The name of the model to use (default: gemini-2.5-flash)
            **kwargs: temperature, max_output_tokens
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        self.client = genai.Client(api_key=api_key)
        self.max_output_tokens = kwargs.get("max_output_tokens", 8192)

    def generate(
        self,
        prompt: str,
        *,
        response_schema: type[BaseModel] | None = None,
        **kwargs,
    ) -> GenerationResult:
        model_name = kwargs.get("model", self.model_name)
        config: dict[str, Any] = {
            "temperature": kwargs.get("temperature", self.temperature),
            "max_output_tokens": kwargs.get("max_output_tokens", self.max_output_tokens),
        }
        if response_schema is not None:
            config["response_mime_type"] = "application/json"
            config["response_schema"] = response_schema

        start = time.perf_counter()
        try:
            response = self.client.models.generate_content(
                model=model_name,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            logger.error(
                "Gemini request failed",
                extra={"extra_fields": {"model": model_name, "error": str(e), "error_type": type(e).__name__}},
            )
            raise UpstreamError(f"Gemini request failed: {e}", source="model") from e
        latency_ms = int((time.perf_counter() - start) * 1000)

        text = getattr(response, "text", None)
        if not text:
            raise UpstreamError("Gemini returned an empty response", source="model")

        return GenerationResult(
            text=text,
            provider=self.provider_name,
            model=model_name,
            latency_ms=latency_ms,
            token_usage=self._token_usage(response),
            finish_reason=self._finish_reason(response),
        )

    @staticmethod
    def _token_usage(response: Any) -> TokenUsage:
        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata is None:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=getattr(usage_metadata, "prompt_token_count", 0) or 0,
            completion_tokens=getattr(usage_metadata, "candidates_token_count", 0) or 0,
            total_tokens=getattr(usage_metadata, "total_token_count", 0) or 0,
        )

    @staticmethod
    def _finish_reason(response: Any) -> str | None:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return None
        reason = getattr(candidates[0], "finish_reason", None)
        if reason is None:
            return None
        name = getattr(reason, "name", str(reason))
        return _FINISH_REASONS.get(name, name)
