"""Tests for evaluation-suite generation."""

import json

import pytest

from conftest import openai_completion
from promptforge.services.eval_generator import (
    EvalGenerator,
    build_evaluation_criteria,
    parse_test_cases_from_text,
)
from promptforge.services.llm.errors import ProviderResponseError
from promptforge.services.llm.models import TestCase


CASES_JSON = json.dumps([
    {"input": "Summarise this in one word", "category": "robustness", "difficulty": "easy"},
    {"input": "Who was the first person on Mars?", "category": "accuracy", "difficulty": "hard"},
])


class ScriptedGateway:
    def __init__(self, reply=CASES_JSON, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate_with_default(self, messages, temperature, max_output_tokens, model):
        self.calls.append((messages, temperature, max_output_tokens, model))
        if self.error is not None:
            raise self.error
        return self.reply


# ============================================================================
# Suite generation
# ============================================================================


@pytest.mark.asyncio
async def test_suite_from_json_reply():
    gateway = ScriptedGateway()
    generator = EvalGenerator(gateway)

    suite = await generator.generate_evaluation_suite(
        "Summarise the text", ["robustness", "accuracy"], sample_size=2
    )

    assert suite.base_prompt == "Summarise the text"
    assert [case.input for case in suite.test_cases] == [
        "Summarise this in one word",
        "Who was the first person on Mars?",
    ]
    assert suite.test_cases[1] == TestCase(
        input="Who was the first person on Mars?", category="accuracy", difficulty="hard"
    )
    assert [c.name for c in suite.criteria] == ["Robustness", "Factual Accuracy"]

    metadata = suite.metadata
    assert (metadata.model, metadata.sample_size, metadata.difficulty) == ("gpt-4.1", 2, "mixed")
    assert metadata.eval_types == ["robustness", "accuracy"]
    assert metadata.generated_at.tzinfo is not None


@pytest.mark.asyncio
async def test_test_case_request_parameters():
    gateway = ScriptedGateway()
    generator = EvalGenerator(gateway)

    await generator.generate_evaluation_suite(
        "Translate to French", ["safety", "creativity"], sample_size=0, model="gpt-4o", difficulty="hard"
    )

    messages, temperature, max_tokens, model = gateway.calls[0]
    assert (temperature, max_tokens, model) == (0.7, 2000, "gpt-4o")
    assert len(messages) == 1
    assert messages[0].role == "user"
    content = messages[0].content
    assert "Translate to French" in content
    assert "EVALUATION TYPES: safety, creativity" in content
    assert "DIFFICULTY: hard" in content
    # Non-positive sample sizes fall back to 10
    assert "Write 10 test cases" in content


@pytest.mark.asyncio
async def test_fenced_json_reply_is_accepted():
    gateway = ScriptedGateway(reply=f"Here you go:\n```json\n{CASES_JSON}\n```\n")
    generator = EvalGenerator(gateway)

    suite = await generator.generate_evaluation_suite("Summarise the text", ["robustness"])

    assert len(suite.test_cases) == 2
    assert suite.test_cases[0].category == "robustness"


@pytest.mark.asyncio
async def test_plain_text_reply_falls_back_to_line_parsing():
    gateway = ScriptedGateway(reply="Here are some ideas:\n\nWhat is 2+2?\n  what is the capital of france  \n")
    generator = EvalGenerator(gateway)

    suite = await generator.generate_evaluation_suite("Answer questions", ["robustness", "safety"])

    assert [(c.input, c.category, c.difficulty) for c in suite.test_cases] == [
        ("Here are some ideas:", "robustness", "easy"),
        ("What is 2+2?", "robustness", "hard"),
        ("what is the capital of france", "safety", "easy"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "prompt, eval_types, message",
    [
        ("", ["robustness"], "Prompt is required"),
        ("Summarise", [], "At least one evaluation type is required"),
    ],
)
async def test_missing_inputs_are_rejected_before_any_request(prompt, eval_types, message):
    gateway = ScriptedGateway()
    generator = EvalGenerator(gateway)

    with pytest.raises(ValueError, match=message):
        await generator.generate_evaluation_suite(prompt, eval_types)

    assert gateway.calls == []


@pytest.mark.asyncio
async def test_gateway_errors_propagate():
    generator = EvalGenerator(ScriptedGateway(error=ProviderResponseError("OpenAI", 503, "busy")))

    with pytest.raises(ProviderResponseError):
        await generator.generate_evaluation_suite("Summarise", ["accuracy"])


@pytest.mark.asyncio
async def test_suite_through_real_gateway(gateway, transport):
    transport.reply(200, payload=openai_completion(CASES_JSON))
    generator = EvalGenerator(gateway)

    suite = await generator.generate_evaluation_suite("Summarise the text", ["accuracy"], sample_size=2)

    assert len(suite.test_cases) == 2
    assert len(transport.requests) == 1
    body = transport.last_body
    assert body["model"] == "gpt-4.1"
    assert body["max_tokens"] == 2000
    assert body["messages"][0]["role"] == "user"


# ============================================================================
# Text fallback and criteria
# ============================================================================


def test_text_fallback_reads_at_most_ten_lines():
    response = "\n".join(f"case {n}" for n in range(15))

    cases = parse_test_cases_from_text(response, [])

    assert [case.input for case in cases] == [f"case {n}" for n in range(10)]
    assert {case.category for case in cases} == {"robustness"}


def test_criteria_share_weight_and_skip_unknown_types():
    criteria = build_evaluation_criteria(["safety", "tone", "creativity"])

    assert [(c.name, c.weight) for c in criteria] == [
        ("Safety & Alignment", 33),
        ("Creativity", 33),
    ]
    assert criteria[0].description == "Resistance to harmful, biased, or inappropriate outputs"


def test_all_four_criteria_get_a_quarter_each():
    criteria = build_evaluation_criteria(["robustness", "creativity", "safety", "accuracy"])

    assert [c.weight for c in criteria] == [25, 25, 25, 25]
    assert [c.name for c in criteria] == ["Robustness", "Creativity", "Safety & Alignment", "Factual Accuracy"]
