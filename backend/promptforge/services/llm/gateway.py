"""
AI Gateway

Routes a provider-agnostic chat request to the adapter for the requested
(or configured default) provider. Unknown providers and missing API keys
are rejected here, before any network I/O happens.
"""

import logging
import time

import httpx

from promptforge.core.config import AIProvider, GatewayConfig, get_settings
from promptforge.services.llm.base import LLMProvider
from promptforge.services.llm.errors import ConfigurationError, UnsupportedProviderError
from promptforge.services.llm.models import GenerationRequest, Message, ProviderStatus
from promptforge.services.llm.registry import (
    PROVIDER_DISPLAY_NAMES,
    create_provider,
    list_providers,
)

logger = logging.getLogger(__name__)


class AIGateway:
    """Single entry point for chat completions across providers."""

    def __init__(self, config: GatewayConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self._http_client = http_client
        # One adapter per provider, created on first use
        self._providers: dict[AIProvider, LLMProvider] = {}

    @property
    def default_provider(self) -> AIProvider:
        return self.config.default_provider

    def _resolve(self, provider: AIProvider | str) -> AIProvider:
        if isinstance(provider, AIProvider):
            return provider
        try:
            return AIProvider(provider)
        except ValueError:
            raise UnsupportedProviderError(provider) from None

    def get_provider(self, provider: AIProvider | str) -> LLMProvider:
        """
        Return the adapter for a provider tag.

        Raises:
            UnsupportedProviderError: The tag is not a known provider
            ConfigurationError: The provider has no API key configured, or
                Azure OpenAI has no endpoint
        """
        tag = self._resolve(provider)
        if not self.config.for_provider(tag).configured:
            raise ConfigurationError(f"{PROVIDER_DISPLAY_NAMES[tag]} API key not configured")
        if tag == AIProvider.AZURE_OPENAI and not self.config.for_provider(tag).base_url:
            raise ConfigurationError(f"{PROVIDER_DISPLAY_NAMES[tag]} base URL not configured")

        if tag not in self._providers:
            self._providers[tag] = create_provider(tag, self.config, self._http_client)
        return self._providers[tag]

    async def generate(
        self,
        messages: list[Message | dict],
        temperature: float,
        max_output_tokens: int | None,
        model: str,
        provider: AIProvider | str,
    ) -> str:
        """
        Produce a chat completion through an explicitly chosen provider.

        Args:
            messages: Ordered conversation; dicts are coerced to Message
            temperature: Sampling temperature in the OpenAI 0-2 range
            max_output_tokens: Token limit; None or <= 0 leaves it to the provider
            model: Model identifier; empty lets the adapter pick its default
            provider: Provider tag

        Returns:
            The generated text
        """
        adapter = self.get_provider(provider)
        messages = [m if isinstance(m, Message) else Message(**m) for m in messages]

        start = time.monotonic()
        text = await adapter.generate(
            messages=messages,
            model=model,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
        )
        logger.debug(
            "provider=%s model=%s elapsed_ms=%d",
            adapter.provider_name,
            model or "<default>",
            (time.monotonic() - start) * 1000,
        )
        return text

    async def generate_with_default(
        self,
        messages: list[Message | dict],
        temperature: float,
        max_output_tokens: int | None,
        model: str,
    ) -> str:
        """Same as generate(), routed to the configured default provider."""
        return await self.generate(
            messages, temperature, max_output_tokens, model, self.config.default_provider
        )

    async def complete(self, request: GenerationRequest) -> str:
        return await self.generate(
            request.messages,
            request.temperature,
            request.max_output_tokens,
            request.model,
            request.provider,
        )

    def provider_status(self) -> ProviderStatus:
        """Which providers exist, which is the default, and which have keys."""
        return ProviderStatus(
            default=self.config.default_provider,
            available=list_providers(),
            configured={
                provider: self.config.for_provider(provider).configured
                for provider in list_providers()
            },
        )


# ── Singleton ─────────────────────────────────────────────────────────────────

_gateway: AIGateway | None = None


def get_gateway() -> AIGateway:
    """Get or create the gateway singleton from process settings."""
    global _gateway
    if _gateway is None:
        _gateway = AIGateway(get_settings().gateway_config())
    return _gateway
