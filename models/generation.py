from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional

FinishReason = Optional[Literal["stop", "length", "content_filter", "error"]]


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0 and (self.prompt_tokens > 0 or self.completion_tokens > 0):
            object.__setattr__(self, "total_tokens", self.prompt_tokens + self.completion_tokens)


@dataclass(frozen=True)
class GenerationResult:
    """Normalized output of a single model call, independent of provider."""

    text: str
    provider: str
    model: str
    latency_ms: int = 0
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    finish_reason: FinishReason = None
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )

    def __post_init__(self):
        valid_reasons = {"stop", "length", "content_filter", "error", None}
        if self.finish_reason not in valid_reasons:
            # keep the provider's raw reason around for debugging
            md = dict(self.metadata)
            md.setdefault("provider_finish_reason", self.finish_reason)
            object.__setattr__(self, "metadata", md)
            object.__setattr__(self, "finish_reason", None)

    @property
    def is_truncated(self) -> bool:
        return self.finish_reason == "length"
