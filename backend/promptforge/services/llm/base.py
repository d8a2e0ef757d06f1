"""
Abstract base class for all LLM providers.

Each provider implements the API-specific translation layer: building the
wire request from provider-agnostic messages, performing the HTTP exchange
and pulling the generated text out of the response. Routing and pre-flight
checks are handled by the gateway.
"""

from abc import ABC, abstractmethod

from promptforge.services.llm.models import Message


class LLMProvider(ABC):
    """Abstract base class for all LLM providers."""

    provider_name: str = "base"
    # Human-readable name used in error messages
    display_name: str = "LLM"

    @abstractmethod
    async def generate(
        self,
        messages: list[Message],
        model: str,
        max_output_tokens: int | None = None,
        temperature: float = 0.7,
    ) -> str:
        """
        Send the conversation to the provider and return the generated text.

        Args:
            messages: Ordered conversation, system turns included
            model: The caller's model identifier (may be empty)
            max_output_tokens: Token limit; None or <= 0 means "not set"
            temperature: Sampling temperature in the OpenAI 0-2 range

        Returns:
            Text of the first choice / content block

        Raises:
            ProviderResponseError: Non-2xx status or empty result list
            TransportError: The HTTP exchange failed
            SerializationError: The response body was not valid JSON
        """
        ...
