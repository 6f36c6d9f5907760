import json
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from models.generation import GenerationResult


class BaseAIClient(ABC):
    """
    Abstract base class for AI model clients.
    All provider clients inherit from this class and return GenerationResult.
    """

    provider_name: str = "unknown"

    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters (model_name, temperature)
        """
        if not api_key:
            raise ValueError(f"API key is required for {self.provider_name}")
        self.api_key = api_key
        self.model_name = kwargs.get("model_name")
        self.temperature = kwargs.get("temperature", 0.3)

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        response_schema: type[BaseModel] | None = None,
        **kwargs,
    ) -> GenerationResult:
        """
        Run one model call.

        Args:
            prompt: The full prompt text
            response_schema: When set, the model is asked for JSON matching this
                pydantic model. The caller validates the returned text.
            **kwargs: Provider overrides (model, temperature, max_output_tokens)

        Returns:
            GenerationResult with the raw text and usage

        Raises:
            UpstreamError: On transport, auth or provider failure, or an empty reply
        """
        pass

    @staticmethod
    def schema_instructions(response_schema: type[BaseModel]) -> str:
        """JSON schema block for providers that cannot take a schema natively."""
        schema: dict[str, Any] = response_schema.model_json_schema()
        return (
            "Return ONLY a JSON object (no markdown, no commentary) that validates against this JSON schema:\n"
            f"{json.dumps(schema, indent=2)}"
        )
