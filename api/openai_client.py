import time

import openai
from pydantic import BaseModel

from models.errors import UpstreamError
from models.generation import GenerationResult, TokenUsage
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class OpenAIClient(BaseAIClient):
    """
    A client for the OpenAI chat completions API.

    Structured requests use JSON mode and carry the schema in the prompt.
    """

    provider_name = "openai"

    def __init__(self, api_key: str, model_name: str = "gpt-4o-mini", **kwargs):
        """
        Args:
            api_key: The OpenAI API key
            model_name: The name of the model to use (default: gpt-4o-mini)
            **kwargs: temperature, max_tokens
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        self.client = openai.OpenAI(api_key=api_key)
        self.max_tokens = kwargs.get("max_tokens", 4096)

    def generate(
        self,
        prompt: str,
        *,
        response_schema: type[BaseModel] | None = None,
        **kwargs,
    ) -> GenerationResult:
        model = kwargs.get("model", self.model_name)
        params = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": kwargs.get("temperature", self.temperature),
            "max_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if response_schema is not None:
            params["messages"] = [
                {"role": "system", "content": self.schema_instructions(response_schema)},
                {"role": "user", "content": prompt},
            ]
            params["response_format"] = {"type": "json_object"}

        start = time.perf_counter()
        try:
            response = self.client.chat.completions.create(**params)
        except openai.OpenAIError as e:
            logger.error(
                "OpenAI request failed",
                extra={"extra_fields": {"model": model, "error": str(e), "error_type": type(e).__name__}},
            )
            raise UpstreamError(f"OpenAI request failed: {e}", source="model") from e
        latency_ms = int((time.perf_counter() - start) * 1000)

        choice = response.choices[0] if response.choices else None
        text = choice.message.content if choice else None
        if not text:
            raise UpstreamError("OpenAI returned an empty response", source="model")

        usage = TokenUsage()
        if getattr(response, "usage", None):
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        return GenerationResult(
            text=text,
            provider=self.provider_name,
            model=model,
            latency_ms=latency_ms,
            token_usage=usage,
            finish_reason=choice.finish_reason,
        )
