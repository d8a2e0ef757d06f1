"""
Anthropic Messages API Provider

- POST {base_url}/v1/messages
- x-api-key + anthropic-version headers (set by the SDK)
- system turns move to the top-level "system" field
- temperature is rescaled from OpenAI's 0-2 range to 0-1
- max_tokens is mandatory
- response.content[0].text
"""

import json

import httpx
import anthropic
from anthropic import AsyncAnthropic

from promptforge.core.config import AIProvider, ProviderConfig
from promptforge.services.llm.base import LLMProvider
from promptforge.services.llm.errors import (
    ConfigurationError,
    EmptyResponseError,
    ProviderResponseError,
    SerializationError,
    TransportError,
)
from promptforge.services.llm.models import Message
from promptforge.services.llm.registry import DEFAULT_ANTHROPIC_MODEL, PROVIDER_DISPLAY_NAMES

DEFAULT_MAX_TOKENS = 1000


def scale_temperature(temperature: float) -> float:
    """Map an OpenAI-range temperature (0-2) onto Anthropic's 0-1."""
    if temperature > 1.0:
        temperature /= 2.0
    return min(max(temperature, 0.0), 1.0)


def split_system(messages: list[Message]) -> tuple[str, list[dict]]:
    """
    Separate system turns from the conversation.

    Only one system prompt survives: when several are present the last one
    wins. The remaining turns keep their order.
    """
    system = ""
    turns = []
    for message in messages:
        if message.role == "system":
            system = message.content
        else:
            turns.append({"role": message.role, "content": message.content})
    return system, turns


class AnthropicProvider(LLMProvider):
    """Provider for the Anthropic Messages API."""

    provider_name = "anthropic"
    display_name = PROVIDER_DISPLAY_NAMES[AIProvider.ANTHROPIC]

    def __init__(
        self,
        config: ProviderConfig,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        try:
            self.client = AsyncAnthropic(
                api_key=config.api_key,
                base_url=config.base_url.rstrip("/") or None,
                timeout=timeout,
                max_retries=0,
                http_client=http_client,
            )
        except anthropic.AnthropicError as e:
            raise ConfigurationError(f"{self.display_name} client misconfigured: {e}") from e

    def _build_params(
        self,
        messages: list[Message],
        model: str,
        max_output_tokens: int | None,
        temperature: float,
    ) -> dict:
        system, turns = split_system(messages)
        params = {
            "model": model or DEFAULT_ANTHROPIC_MODEL,
            "max_tokens": max_output_tokens if max_output_tokens and max_output_tokens > 0 else DEFAULT_MAX_TOKENS,
            "temperature": scale_temperature(temperature),
            "messages": turns,
        }
        if system:
            params["system"] = system
        return params

    async def generate(
        self,
        messages: list[Message],
        model: str,
        max_output_tokens: int | None = None,
        temperature: float = 0.7,
    ) -> str:
        params = self._build_params(messages, model, max_output_tokens, temperature)

        try:
            response = await self.client.messages.create(**params)
        except anthropic.APIStatusError as e:
            raise ProviderResponseError(self.display_name, e.status_code, e.response.text) from e
        except anthropic.APIConnectionError as e:
            raise TransportError(f"{self.display_name} request failed: {e}") from e
        except (anthropic.APIResponseValidationError, json.JSONDecodeError) as e:
            raise SerializationError(f"{self.display_name} response could not be decoded: {e}") from e

        if isinstance(response, str):
            raise SerializationError(f"{self.display_name} returned a non-JSON response body")
        # A JSON body without "content" counts as zero blocks
        content = getattr(response, "content", None)
        if not content:
            raise EmptyResponseError(self.display_name)
        return getattr(content[0], "text", "") or ""
