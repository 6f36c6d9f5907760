"""Language model clients."""

from .base_client import BaseAIClient

__all__ = ["BaseAIClient"]
