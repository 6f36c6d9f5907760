"""
Run a model call whose reply must validate against a pydantic schema.

The model's text is never trusted as-is: it is parsed and validated, and a
schema mismatch is retried with a corrective prompt until the attempt budget
runs out, at which point SchemaViolationError is raised.
"""

import asyncio
import re
from dataclasses import dataclass
from typing import TypeVar

import pydantic
from pydantic import BaseModel

from api.base_client import BaseAIClient
from models.errors import SchemaViolationError, UpstreamError
from models.generation import GenerationResult
from utils.logger import get_logger, log_llm_call

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(?P<body>.*?)\s*```$", re.S | re.I)
MAX_ECHOED_CHARS = 2000


@dataclass(frozen=True)
class StructuredOutputPolicy:
    max_attempts: int = 2
    timeout_s: float | None = 120.0


def strip_code_fences(text: str) -> str:
    """Unwrap a reply of the form ```json ... ``` into its body."""
    stripped = (text or "").strip()
    match = _FENCE_RE.match(stripped)
    return match.group("body") if match else stripped


def parse_structured(text: str, schema: type[SchemaT]) -> SchemaT:
    """
    Validate raw model text against ``schema``.

    Raises:
        pydantic.ValidationError: If the text is not JSON or does not match the schema
    """
    return schema.model_validate_json(strip_code_fences(text))


def build_corrective_prompt(prompt: str, raw_text: str, error: pydantic.ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ())) or '<root>'}: {err.get('msg', '')}"
        for err in error.errors()
    )
    echoed = raw_text if len(raw_text) <= MAX_ECHOED_CHARS else raw_text[:MAX_ECHOED_CHARS] + "..."
    return (
        f"{prompt}\n\n"
        "Your previous reply did not match the required JSON format.\n"
        f"Previous reply: {echoed}\n"
        f"Problems: {problems}\n"
        "Reply again with ONLY a corrected JSON object containing every required field."
    )


class StructuredOutputRunner:
    """Drives a BaseAIClient for schema-constrained calls from async code."""

    def __init__(self, client: BaseAIClient, policy: StructuredOutputPolicy | None = None):
        self.client = client
        self.policy = policy or StructuredOutputPolicy()

    async def run(self, prompt: str, schema: type[SchemaT], *, caller: str) -> SchemaT:
        """
        Args:
            prompt: Prompt text
            schema: Pydantic model the reply must validate against
            caller: Name used in logs (e.g. "synthesis", "refresh")

        Raises:
            UpstreamError: The model call itself failed or timed out
            SchemaViolationError: Every attempt returned output that failed validation
        """
        current_prompt = prompt
        last_error: pydantic.ValidationError | None = None
        last_text = ""

        for attempt in range(1, self.policy.max_attempts + 1):
            result = await self._generate(current_prompt, schema, caller=caller)
            last_text = result.text
            try:
                return parse_structured(result.text, schema)
            except pydantic.ValidationError as e:
                last_error = e
                logger.warning(
                    "Structured output failed validation",
                    extra={
                        "extra_fields": {
                            "caller": caller,
                            "schema": schema.__name__,
                            "attempt": attempt,
                            "max_attempts": self.policy.max_attempts,
                            "error_count": e.error_count(),
                            "truncated": result.is_truncated,
                        }
                    },
                )
                current_prompt = build_corrective_prompt(prompt, result.text, e)

        raise SchemaViolationError(
            f"Model output did not match the {schema.__name__} schema after "
            f"{self.policy.max_attempts} attempt(s): {last_error}",
            schema=schema.__name__,
            raw_text=last_text,
        )

    async def _generate(self, prompt: str, schema: type[BaseModel], *, caller: str) -> GenerationResult:
        call = asyncio.to_thread(self.client.generate, prompt, response_schema=schema)
        try:
            if self.policy.timeout_s:
                result = await asyncio.wait_for(call, timeout=self.policy.timeout_s)
            else:
                result = await call
        except asyncio.TimeoutError as e:
            log_llm_call(
                logger,
                caller=caller,
                provider=self.client.provider_name,
                model=self.client.model_name or "unknown",
                latency_ms=int((self.policy.timeout_s or 0) * 1000),
                status="timeout",
            )
            raise UpstreamError(
                f"Model call timed out after {self.policy.timeout_s}s", source="model"
            ) from e
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError(f"Model call failed: {e}", source="model") from e

        log_llm_call(
            logger,
            caller=caller,
            provider=result.provider,
            model=result.model,
            latency_ms=result.latency_ms,
            prompt_tokens=result.token_usage.prompt_tokens,
            completion_tokens=result.token_usage.completion_tokens,
        )
        return result
