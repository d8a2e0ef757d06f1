"""
Azure OpenAI Provider

Same Chat Completions wire format as OpenAI, with Azure's differences:
- POST {base_url}/openai/deployments/{deployment}/chat/completions?api-version=...
- api-key: <key> instead of a bearer token
- the deployment is looked up from the model name
- o3 only accepts temperature 1 and takes max_completion_tokens
"""

import httpx
from openai import AsyncAzureOpenAI

from promptforge.core.config import AIProvider, ProviderConfig
from promptforge.services.llm.models import Message
from promptforge.services.llm.openai_chat import OpenAIChatProvider
from promptforge.services.llm.registry import PROVIDER_DISPLAY_NAMES, resolve_deployment

O3_MODEL = "o3"


class AzureOpenAIProvider(OpenAIChatProvider):
    """Provider for Azure-hosted OpenAI deployments."""

    provider_name = "azure-openai"
    display_name = PROVIDER_DISPLAY_NAMES[AIProvider.AZURE_OPENAI]

    def _create_client(
        self,
        config: ProviderConfig,
        timeout: float,
        http_client: httpx.AsyncClient | None,
    ) -> AsyncAzureOpenAI:
        # The SDK routes on the "model" field: /openai/deployments/{model}/...
        return AsyncAzureOpenAI(
            api_key=config.api_key,
            api_version=config.api_version,
            azure_endpoint=config.base_url.rstrip("/"),
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
        is_o3 = model == O3_MODEL
        params = {
            "model": resolve_deployment(model),
            "messages": [message.model_dump() for message in messages],
            "temperature": 1 if is_o3 else temperature,
        }
        if max_output_tokens and max_output_tokens > 0:
            # o3 rejects max_tokens; only one of the two fields is ever sent
            if is_o3:
                params["max_completion_tokens"] = max_output_tokens
            else:
                params["max_tokens"] = max_output_tokens
        return params
