"""
Model Registry

Default model identifiers, the Azure deployment table, and the factory
that builds a provider adapter for a provider tag.
"""

import httpx

from promptforge.core.config import AIProvider, GatewayConfig
from promptforge.services.llm.base import LLMProvider


# ── Default models ────────────────────────────────────────────────────────────

# Used by the analyzers and the prompt runner when the caller sends no model
DEFAULT_MODEL_ID = "gpt-4.1"
# Prompt-engineer conversations default to the reasoning model
DEFAULT_PROMPT_ENGINEER_MODEL_ID = "o3"

# Substituted by the adapters themselves when the model is empty
DEFAULT_OPENAI_MODEL = "gpt-4"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"

PROVIDER_DISPLAY_NAMES: dict[AIProvider, str] = {
    AIProvider.OPENAI: "OpenAI",
    AIProvider.AZURE_OPENAI: "Azure OpenAI",
    AIProvider.ANTHROPIC: "Anthropic",
}


# ── Azure deployments ─────────────────────────────────────────────────────────
# Maps a model name to the deployment that serves it. Only models with a
# provisioned deployment are listed; anything else goes to the fallback.

AZURE_DEPLOYMENTS: dict[str, str] = {
    "gpt-4.1": "gpt-4.1",
    "o3": "o3",
}

DEFAULT_AZURE_DEPLOYMENT = "gpt-4.1"


def resolve_deployment(model: str) -> str:
    """Return the Azure deployment for a model, falling back to the default."""
    return AZURE_DEPLOYMENTS.get(model, DEFAULT_AZURE_DEPLOYMENT)


# ── Provider Factory ──────────────────────────────────────────────────────────


def create_provider(
    provider: AIProvider,
    config: GatewayConfig,
    http_client: httpx.AsyncClient | None = None,
) -> LLMProvider:
    """Create a provider adapter for a provider tag."""
    provider_config = config.for_provider(provider)
    if provider == AIProvider.OPENAI:
        from promptforge.services.llm.openai_chat import OpenAIChatProvider
        return OpenAIChatProvider(provider_config, config.request_timeout, http_client)
    elif provider == AIProvider.AZURE_OPENAI:
        from promptforge.services.llm.azure_openai import AzureOpenAIProvider
        return AzureOpenAIProvider(provider_config, config.request_timeout, http_client)
    # AIProvider is closed; the only tag left is Anthropic
    from promptforge.services.llm.anthropic_messages import AnthropicProvider
    return AnthropicProvider(provider_config, config.request_timeout, http_client)


def list_providers() -> list[AIProvider]:
    """All provider tags the gateway can route to."""
    return list(AIProvider)
