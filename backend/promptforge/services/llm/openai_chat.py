"""
OpenAI Chat Completions API Provider

Handles any OpenAI-compatible endpoint:
- POST {base_url}/chat/completions
- Authorization: Bearer <key>
- system turns stay inline in messages
- response.choices[0].message.content
"""

import json

import httpx
import openai
from openai import AsyncOpenAI

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
from promptforge.services.llm.registry import DEFAULT_OPENAI_MODEL, PROVIDER_DISPLAY_NAMES


class OpenAIChatProvider(LLMProvider):
    """Provider for the OpenAI Chat Completions API."""

    provider_name = "openai"
    display_name = PROVIDER_DISPLAY_NAMES[AIProvider.OPENAI]

    def __init__(
        self,
        config: ProviderConfig,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        try:
            self.client = self._create_client(config, timeout, http_client)
        except openai.OpenAIError as e:
            raise ConfigurationError(f"{self.display_name} client misconfigured: {e}") from e

    def _create_client(
        self,
        config: ProviderConfig,
        timeout: float,
        http_client: httpx.AsyncClient | None,
    ) -> AsyncOpenAI:
        # Retries are the caller's decision, never the SDK's
        return AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url.rstrip("/") or None,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    def _build_params(
        self,
        messages: list[Message],
        model: str,
        max_output_tokens: int | None,
        temperature: float,
    ) -> dict:
        params = {
            "model": model or DEFAULT_OPENAI_MODEL,
            "messages": [message.model_dump() for message in messages],
            "temperature": temperature,
        }
        if max_output_tokens and max_output_tokens > 0:
            params["max_tokens"] = max_output_tokens
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
            response = await self.client.chat.completions.create(**params)
        except openai.APIStatusError as e:
            raise ProviderResponseError(self.display_name, e.status_code, e.response.text) from e
        except openai.APIConnectionError as e:
            raise TransportError(f"{self.display_name} request failed: {e}") from e
        except (openai.APIResponseValidationError, json.JSONDecodeError) as e:
            raise SerializationError(f"{self.display_name} response could not be decoded: {e}") from e

        return self._extract_text(response)

    def _extract_text(self, response) -> str:
        """Pull the first choice's content out of a chat completion."""
        if isinstance(response, str):
            # The SDK hands back raw text when the body was not JSON
            raise SerializationError(f"{self.display_name} returned a non-JSON response body")
        # A JSON body without "choices" counts as zero choices
        choices = getattr(response, "choices", None)
        if not choices:
            raise EmptyResponseError(self.display_name)
        return choices[0].message.content or ""
