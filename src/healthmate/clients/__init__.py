"""Chat completion clients."""

from .base import CompletionClient
from .openrouter import OpenRouterClient

__all__ = ["CompletionClient", "OpenRouterClient"]
