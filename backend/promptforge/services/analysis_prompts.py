"""
Analysis Prompt Builder

Turns a prompt under review plus its metrics into the system/user message
pairs sent for the quick and the detailed critique.
"""

from promptforge.services.llm.models import Message, PromptMetrics


DETAILED_SYSTEM_PROMPT = """You are an expert prompt engineer. Analyze the prompt you are given and explain its structure, its content, and anything that may affect the quality of a model's response to it.

1. Length and wording: report the length of the prompt (characters, words, approximate tokens), the special characters it uses, and any phrasing that could confuse the model. Note how a model is likely to interpret the prompt and any biases or limitations this may introduce.
2. Task Definition: break the prompt down into its task, subtasks and objectives.
3. Contextual Relevance: judge how well the prompt fits its context, which links to the context it relies on, and how strong those links are.
4. Structure Analysis: describe how the prompt is composed and organized.
5. Evaluation Criteria: evaluate how effectively the prompt achieves its purpose. State the criteria you used, such as clarity, specificity, relevance and coherence.
6. Audience Analysis: assess whether the prompt suits its audience, considering language complexity and technical jargon.
7. Language Analysis: evaluate grammar, vocabulary and style, and any cultural or regional bias, and how they may influence the response.

Document any issue you encounter during the analysis together with a recommendation for fixing it. Finish with a narrated summary of the prompt's strengths and weaknesses and concrete recommendations for improving it.

CRITICAL: Respond in valid HTML only, never markdown. Use these tags:
- <h2>Section</h2> for main sections
- <h3>Subsection</h3> for subsections
- <p>Text</p> for paragraphs
- <ul><li>Item</li></ul> and <ol><li>Item</li></ol> for lists
- <strong>Important</strong> and <em>Subtle</em> for emphasis
- <div class="analysis-section">...</div> to group a section
- <div class="metrics">...</div> for statistics
- <div class="recommendation">...</div> for suggestions

Start with HTML immediately, without any preamble."""


QUICK_SYSTEM_PROMPT = """You are a prompt analysis expert. Give a QUICK, SUCCINCT review of the prompt you are given.

Cover only:
1. Overall Quality Score (1-10)
2. Key Strengths (2-3 points max)
3. Critical Issues (2-3 points max)
4. Essential Fixes (2-3 points max)

CRITICAL: Respond in valid HTML only. Use these tags:
- <div class="quick-analysis">...</div> as the container
- <div class="score">Score: X/10</div>
- <div class="strengths"><strong>Strengths:</strong> ...</div>
- <div class="issues"><strong>Issues:</strong> ...</div>
- <div class="fixes"><strong>Essential Fixes:</strong> ...</div>
- <ul><li>Item</li></ul> for lists
- <strong>Bold</strong> for emphasis

Maximum 200 words in total."""


def build_detailed_messages(prompt: str, metrics: PromptMetrics) -> list[Message]:
    """Messages for the exhaustive critique."""
    user_prompt = (
        "Please analyze this prompt with the following basic metrics:\n\n"
        "PROMPT METRICS:\n"
        f"- Characters: {metrics.character_count}\n"
        f"- Words: {metrics.word_count}\n"
        f"- Lines: {metrics.line_count}\n"
        f"- Special Characters: {metrics.special_characters_display()}\n\n"
        "PROMPT TO ANALYZE:\n"
        f"{prompt}"
    )
    return [
        Message(role="system", content=DETAILED_SYSTEM_PROMPT),
        Message(role="user", content=user_prompt),
    ]


def build_quick_messages(prompt: str, metrics: PromptMetrics) -> list[Message]:
    """Messages for the short structured critique."""
    user_prompt = (
        "Analyze this prompt quickly:\n\n"
        f"METRICS: {metrics.character_count} chars, {metrics.word_count} words, "
        f"{metrics.line_count} lines\n"
        f"PROMPT: {prompt}"
    )
    return [
        Message(role="system", content=QUICK_SYSTEM_PROMPT),
        Message(role="user", content=user_prompt),
    ]
