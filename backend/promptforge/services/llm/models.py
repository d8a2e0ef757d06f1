"""
Pydantic models shared by the gateway, the providers and the analyzers.

Provider adapters translate these into each vendor's wire format; nothing
in here knows about a particular provider.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from promptforge.core.config import AIProvider


class Message(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class GenerationRequest(BaseModel):
    messages: list[Message]
    temperature: float  # OpenAI convention, 0-2
    max_output_tokens: int | None = None
    model: str = ""
    provider: AIProvider


class PromptMetrics(BaseModel):
    character_count: int
    word_count: int
    line_count: int
    special_characters: list[str]  # distinct, in order of first appearance

    def special_characters_display(self) -> str:
        if not self.special_characters:
            return "None detected"
        return ", ".join(self.special_characters)


class DualAnalysisResult(BaseModel):
    quick_report: str
    detailed_report: str


class ModelExecutionResult(BaseModel):
    model: str
    success: bool
    response: str = ""
    error: str = ""
    execution_time_ms: int


class ProviderStatus(BaseModel):
    default: AIProvider
    available: list[AIProvider]
    configured: dict[AIProvider, bool]


# ── Evaluation suites ─────────────────────────────────────────────────────────


class TestCase(BaseModel):
    __test__ = False  # not a pytest class

    input: str = ""
    category: str = ""
    difficulty: str = ""
    expected: str = ""


class EvalCriterion(BaseModel):
    name: str
    description: str
    weight: int  # percent; the selected criteria share 100


class EvalMetadata(BaseModel):
    generated_at: datetime
    model: str
    sample_size: int
    eval_types: list[str]
    difficulty: str


class EvalData(BaseModel):
    test_cases: list[TestCase]
    criteria: list[EvalCriterion]
    base_prompt: str
    metadata: EvalMetadata

