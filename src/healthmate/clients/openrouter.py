"""OpenRouter chat completion client.

OpenRouter speaks the OpenAI chat completions protocol, so this wraps the
``openai`` SDK pointed at the OpenRouter base URL.
"""

import logging

from openai import APIError, AsyncOpenAI

from ..config import Settings
from ..errors import ExternalServiceError

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """Completion client backed by OpenRouter."""

    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None):
        """Initialize the client.

        Args:
            settings: Provides the API key, base URL, model and the
                attribution headers OpenRouter expects
            client: Pre-built SDK client, mainly for tests
        """
        self.model = settings.model
        self._client = client or AsyncOpenAI(
            api_key=settings.api_key,
            base_url=settings.api_base_url,
            default_headers={
                "HTTP-Referer": settings.app_url,
                "X-Title": settings.app_title,
            },
        )

    async def complete(
        self,
        messages: list[dict],
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> dict:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except APIError as e:
            logger.warning("Completion request to %s failed: %s", self.model, e)
            raise ExternalServiceError(f"Completion request failed: {e}") from e

        if not response.choices:
            raise ExternalServiceError("Completion response contained no choices")

        message = response.choices[0].message
        logger.debug("Completion message from %s: %r", self.model, message)
        return message.model_dump()
