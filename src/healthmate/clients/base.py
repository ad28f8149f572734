"""Base protocol for chat completion clients."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionClient(Protocol):
    """Protocol for chat completion backends."""

    async def complete(
        self,
        messages: list[dict],
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> dict:
        """Run one completion.

        Args:
            messages: Chat messages as ``{"role": ..., "content": ...}`` dicts
            max_tokens: Completion token budget
            temperature: Sampling temperature

        Returns:
            The first choice's message as a plain dict. It may carry
            ``content``, ``reasoning`` and ``reasoning_details`` keys.

        Raises:
            ExternalServiceError: if the service call fails
        """
        ...
