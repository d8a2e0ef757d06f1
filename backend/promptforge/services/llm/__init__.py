"""
LLM Provider Abstraction Layer

Provides a unified interface for multiple LLM providers (OpenAI, Azure
OpenAI, Anthropic) behind a single gateway that routes each request to the
right protocol adapter.
"""

from promptforge.services.llm.errors import (
    AnalysisError,
    ConfigurationError,
    EmptyResponseError,
    GatewayError,
    ProviderResponseError,
    SerializationError,
    TransportError,
    UnsupportedProviderError,
)
from promptforge.services.llm.gateway import AIGateway, get_gateway
from promptforge.services.llm.models import (
    DualAnalysisResult,
    EvalCriterion,
    EvalData,
    EvalMetadata,
    GenerationRequest,
    Message,
    ModelExecutionResult,
    PromptMetrics,
    ProviderStatus,
    TestCase,
)
from promptforge.services.llm.registry import DEFAULT_MODEL_ID, list_providers

__all__ = [
    "AIGateway",
    "get_gateway",
    "DEFAULT_MODEL_ID",
    "list_providers",
    "Message",
    "GenerationRequest",
    "PromptMetrics",
    "DualAnalysisResult",
    "ModelExecutionResult",
    "ProviderStatus",
    "TestCase",
    "EvalCriterion",
    "EvalMetadata",
    "EvalData",
    "GatewayError",
    "ConfigurationError",
    "UnsupportedProviderError",
    "TransportError",
    "ProviderResponseError",
    "EmptyResponseError",
    "SerializationError",
    "AnalysisError",
]
