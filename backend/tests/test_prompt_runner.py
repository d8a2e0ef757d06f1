"""Tests for plain prompt execution, prompt engineering and model comparison."""

import pytest

from conftest import openai_completion
from promptforge.services.llm.errors import ProviderResponseError
from promptforge.services.llm.models import Message
from promptforge.services.prompt_runner import PromptRunner


class RecordingGateway:
    def __init__(self, failures=None):
        self.calls = []
        self.failures = failures or {}

    async def generate_with_default(self, messages, temperature, max_output_tokens, model):
        self.calls.append((messages, temperature, max_output_tokens, model))
        if model in self.failures:
            raise self.failures[model]
        return f"answer from {model}"


@pytest.mark.asyncio
async def test_execute_prompt_applies_defaults():
    gateway = RecordingGateway()
    runner = PromptRunner(gateway)

    assert await runner.execute_prompt("Tell me a joke") == "answer from gpt-4.1"

    messages, temperature, max_tokens, model = gateway.calls[0]
    assert messages == [Message(role="user", content="Tell me a joke")]
    assert (temperature, max_tokens, model) == (0.7, 0, "gpt-4.1")


@pytest.mark.asyncio
async def test_execute_prompt_keeps_explicit_values():
    gateway = RecordingGateway()
    runner = PromptRunner(gateway)

    await runner.execute_prompt("Hi", model="gpt-4o", temperature=1.2, max_tokens=64)

    _, temperature, max_tokens, model = gateway.calls[0]
    assert (temperature, max_tokens, model) == (1.2, 64, "gpt-4o")


@pytest.mark.asyncio
async def test_engineer_prompt_defaults_to_o3():
    gateway = RecordingGateway()
    runner = PromptRunner(gateway)
    conversation = [
        {"role": "system", "content": "You improve prompts."},
        {"role": "user", "content": "Make this better: summarize"},
    ]

    assert await runner.engineer_prompt(conversation) == "answer from o3"

    messages, temperature, max_tokens, model = gateway.calls[0]
    assert messages is conversation
    assert (temperature, max_tokens, model) == (0.7, 2000, "o3")


@pytest.mark.asyncio
async def test_compare_models_records_per_model_failures():
    gateway = RecordingGateway(failures={"gpt-4o": ProviderResponseError("OpenAI", 503, "overloaded")})
    runner = PromptRunner(gateway)

    results = await runner.compare_models("Hi", ["gpt-4.1", "gpt-4o", "o3"])

    assert [r.model for r in results] == ["gpt-4.1", "gpt-4o", "o3"]
    assert [r.success for r in results] == [True, False, True]
    assert results[0].response == "answer from gpt-4.1"
    assert "503" in results[1].error
    assert results[1].response == ""
    assert all(r.execution_time_ms >= 0 for r in results)
    assert all(call[1:3] == (0.7, 1000) for call in gateway.calls)


@pytest.mark.asyncio
async def test_compare_models_requires_models():
    runner = PromptRunner(RecordingGateway())

    with pytest.raises(ValueError, match="At least one model"):
        await runner.compare_models("Hi", [])


@pytest.mark.asyncio
async def test_execute_prompt_through_real_gateway(gateway, transport):
    transport.reply(200, payload=openai_completion("42"))
    runner = PromptRunner(gateway)

    assert await runner.execute_prompt("What is 6 x 7?") == "42"
    body = transport.last_body
    assert body["model"] == "gpt-4.1"
    assert body["temperature"] == 0.7
    assert "max_tokens" not in body
