"""
Prompt Analyzer

Produces natural-language critiques of a prompt through the AI gateway:
- analyze_prompt(): one detailed report
- dual_analyze_prompt(): a quick and a detailed report generated
  concurrently and returned together

Both reports are built from the same PromptMetrics so they agree on the
basic facts about the input.
"""

import asyncio
import logging
import unicodedata

from promptforge.services.analysis_prompts import build_detailed_messages, build_quick_messages
from promptforge.services.llm.errors import AnalysisError
from promptforge.services.llm.gateway import AIGateway, get_gateway
from promptforge.services.llm.models import DualAnalysisResult, PromptMetrics
from promptforge.services.llm.registry import DEFAULT_MODEL_ID

logger = logging.getLogger(__name__)

DETAILED_TEMPERATURE = 0.7
DETAILED_MAX_TOKENS = 2000
QUICK_TEMPERATURE = 0.5
QUICK_MAX_TOKENS = 500


def calculate_metrics(prompt: str) -> PromptMetrics:
    """Count characters, words and lines, and collect punctuation/symbols."""
    special_characters: list[str] = []
    for char in prompt:
        # Unicode punctuation (P*) and symbols (S*)
        if unicodedata.category(char)[0] in ("P", "S") and char not in special_characters:
            special_characters.append(char)

    return PromptMetrics(
        character_count=len(prompt),
        word_count=len(prompt.split()),
        line_count=len(prompt.split("\n")),
        special_characters=special_characters,
    )


class PromptAnalyzer:
    """Runs prompt critiques against the gateway's default provider."""

    def __init__(self, gateway: AIGateway):
        self.gateway = gateway
        # Branches whose sibling already failed; kept alive until they finish
        self._abandoned: set[asyncio.Task] = set()

    async def analyze_prompt(
        self,
        prompt: str,
        model: str | None = None,
        metrics: PromptMetrics | None = None,
    ) -> str:
        """
        Generate the detailed critique of a prompt.

        Args:
            prompt: The prompt under review
            model: Model identifier; falls back to DEFAULT_MODEL_ID
            metrics: Precomputed metrics, computed here when omitted

        Returns:
            HTML report text
        """
        model = model or DEFAULT_MODEL_ID
        if metrics is None:
            metrics = calculate_metrics(prompt)

        return await self.gateway.generate_with_default(
            build_detailed_messages(prompt, metrics),
            DETAILED_TEMPERATURE,
            DETAILED_MAX_TOKENS,
            model,
        )

    async def quick_analysis(self, prompt: str, metrics: PromptMetrics, model: str) -> str:
        """Generate the short structured critique."""
        return await self.gateway.generate_with_default(
            build_quick_messages(prompt, metrics),
            QUICK_TEMPERATURE,
            QUICK_MAX_TOKENS,
            model,
        )

    async def dual_analyze_prompt(self, prompt: str, model: str | None = None) -> DualAnalysisResult:
        """
        Generate the quick and the detailed critique concurrently.

        The first branch to fail decides the outcome: its error is raised as
        soon as it is observed, and the other branch is left to finish on its
        own with its result discarded. No partial result is ever returned. If the
        caller is cancelled while waiting, both branches are abandoned the same
        way and the cancellation propagates.

        Raises:
            AnalysisError: Either branch failed; the original error is the cause
        """
        model = model or DEFAULT_MODEL_ID
        metrics = calculate_metrics(prompt)

        quick = asyncio.create_task(
            self.quick_analysis(prompt, metrics, model), name="quick-analysis"
        )
        detailed = asyncio.create_task(
            self.analyze_prompt(prompt, model, metrics), name="detailed-analysis"
        )
        branches = {quick: "quick", detailed: "detailed"}

        try:
            done, pending = await asyncio.wait(branches, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            # The caller went away; both branches keep running unobserved
            for task, label in branches.items():
                self._abandon(task, label)
            raise

        failed = [task for task in (quick, detailed) if task in done and task.exception() is not None]
        if failed:
            for task in pending:
                self._abandon(task, branches[task])
            first = failed[0]
            error = first.exception()
            raise AnalysisError(f"{branches[first]} analysis failed: {error}") from error

        return DualAnalysisResult(
            quick_report=quick.result(),
            detailed_report=detailed.result(),
        )

    def _abandon(self, task: asyncio.Task, label: str) -> None:
        self._abandoned.add(task)

        def _discard(finished: asyncio.Task) -> None:
            self._abandoned.discard(finished)
            if finished.cancelled():
                return
            # Retrieve the outcome so it is not reported as unhandled
            error = finished.exception()
            logger.debug(
                "discarded abandoned %s analysis outcome (error=%s)",
                label,
                error,
            )

        task.add_done_callback(_discard)


# ── Singleton ─────────────────────────────────────────────────────────────────

_analyzer: PromptAnalyzer | None = None


def get_analyzer() -> PromptAnalyzer:
    """Get or create the prompt analyzer singleton."""
    global _analyzer
    if _analyzer is None:
        _analyzer = PromptAnalyzer(get_gateway())
    return _analyzer
