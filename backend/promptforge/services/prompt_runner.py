"""
Prompt Runner

The plain (non-analysis) uses of the gateway: running a prompt as-is,
continuing a prompt-engineering conversation, and comparing several models
on the same prompt.
"""

import asyncio
import logging
import time

from promptforge.services.llm.errors import GatewayError
from promptforge.services.llm.gateway import AIGateway, get_gateway
from promptforge.services.llm.models import Message, ModelExecutionResult
from promptforge.services.llm.registry import DEFAULT_MODEL_ID, DEFAULT_PROMPT_ENGINEER_MODEL_ID

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
PROMPT_ENGINEER_MAX_TOKENS = 2000
COMPARE_MAX_TOKENS = 1000


class PromptRunner:
    def __init__(self, gateway: AIGateway):
        self.gateway = gateway

    async def execute_prompt(
        self,
        prompt: str,
        model: str | None = None,
        temperature: float = 0,
        max_tokens: int = 0,
    ) -> str:
        """Run a single user prompt. A zero temperature means "use the default"."""
        return await self.gateway.generate_with_default(
            [Message(role="user", content=prompt)],
            temperature or DEFAULT_TEMPERATURE,
            max_tokens,
            model or DEFAULT_MODEL_ID,
        )

    async def engineer_prompt(
        self,
        messages: list[Message | dict],
        model: str | None = None,
        temperature: float = 0,
    ) -> str:
        """Continue a prompt-engineering chat, by default on the reasoning model."""
        return await self.gateway.generate_with_default(
            messages,
            temperature or DEFAULT_TEMPERATURE,
            PROMPT_ENGINEER_MAX_TOKENS,
            model or DEFAULT_PROMPT_ENGINEER_MODEL_ID,
        )

    async def compare_models(
        self,
        prompt: str,
        models: list[str],
        temperature: float = 0,
        max_tokens: int = 0,
    ) -> list[ModelExecutionResult]:
        """
        Run the same prompt against several models.

        Each model gets its own result in input order; a failing model is
        recorded on its result instead of failing the whole comparison.

        Raises:
            ValueError: No models were given
        """
        if not models:
            raise ValueError("At least one model must be specified")

        messages = [Message(role="user", content=prompt)]
        temperature = temperature or DEFAULT_TEMPERATURE
        max_tokens = max_tokens or COMPARE_MAX_TOKENS

        async def run(model: str) -> ModelExecutionResult:
            start = time.monotonic()
            try:
                response = await self.gateway.generate_with_default(
                    messages, temperature, max_tokens, model
                )
            except GatewayError as e:
                logger.debug("model %s failed during comparison: %s", model, e)
                return ModelExecutionResult(
                    model=model,
                    success=False,
                    error=str(e),
                    execution_time_ms=int((time.monotonic() - start) * 1000),
                )
            return ModelExecutionResult(
                model=model,
                success=True,
                response=response,
                execution_time_ms=int((time.monotonic() - start) * 1000),
            )

        return list(await asyncio.gather(*(run(model) for model in models)))


# ── Singleton ─────────────────────────────────────────────────────────────────

_runner: PromptRunner | None = None


def get_prompt_runner() -> PromptRunner:
    """Get or create the prompt runner singleton."""
    global _runner
    if _runner is None:
        _runner = PromptRunner(get_gateway())
    return _runner
