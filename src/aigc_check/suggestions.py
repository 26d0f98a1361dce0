"""Improvement suggestions: per-rule templates and model-written extras."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aigc_check.constants import Priority, RuleType, SuggestionCategory
from aigc_check.detection.schemas import RuleResult
from aigc_check.semantic.schemas import LLMSuggestion


class SuggestionExample(BaseModel):
    before: str
    after: str
    reason: str = ""


class Suggestion(BaseModel):
    category: SuggestionCategory
    priority: Priority
    title: str
    description: str
    examples: list[SuggestionExample] = Field(
        default_factory=lambda: list[SuggestionExample]()
    )
    related_rule: RuleType | None = None


# ── Templates (one per rule type, emitted when the rule fires) ─────

SUGGESTION_TEMPLATES: dict[RuleType, Suggestion] = {
    RuleType.HIGH_FREQ_WORDS: Suggestion(
        category=SuggestionCategory.VOCABULARY,
        priority=Priority.HIGH,
        title="Cut back on stock AI vocabulary",
        description=(
            "Avoid leaning on words such as crucial, pivotal and vital; "
            "choose plainer and more varied wording."
        ),
        examples=[
            SuggestionExample(
                before="This is a crucial step in the process.",
                after="This is an important step in the process.",
                reason="A plainer word reads less like generated text",
            )
        ],
        related_rule=RuleType.HIGH_FREQ_WORDS,
    ),
    RuleType.SENTENCE_STARTERS: Suggestion(
        category=SuggestionCategory.SENTENCE,
        priority=Priority.HIGH,
        title="Vary how sentences open",
        description=(
            "Avoid opening sentence after sentence with Additionally, "
            "Furthermore or Moreover; mix up the sentence structure."
        ),
        examples=[
            SuggestionExample(
                before=(
                    "Additionally, we need to consider the cost. "
                    "Furthermore, the timeline is important."
                ),
                after=(
                    "We also need to consider the cost. "
                    "The timeline matters too."
                ),
                reason="Connect ideas the way people speak",
            )
        ],
        related_rule=RuleType.SENTENCE_STARTERS,
    ),
    RuleType.FALSE_RANGE: Suggestion(
        category=SuggestionCategory.STRUCTURE,
        priority=Priority.MEDIUM,
        title="Check range expressions",
        description=(
            'Use "from X to Y" only when X and Y sit on a real scale; '
            "otherwise list the items directly."
        ),
        related_rule=RuleType.FALSE_RANGE,
    ),
    RuleType.CITATION_ANOMALY: Suggestion(
        category=SuggestionCategory.FORMATTING,
        priority=Priority.HIGH,
        title="Remove generated citation residue",
        description=(
            "Delete every assistant UTM parameter, ghost citation "
            "marker and placeholder date."
        ),
        related_rule=RuleType.CITATION_ANOMALY,
    ),
    RuleType.EM_DASH: Suggestion(
        category=SuggestionCategory.SENTENCE,
        priority=Priority.MEDIUM,
        title="Use fewer em dashes",
        description=(
            "Em dashes (—) in moderation are fine; heavy use feels "
            "unnatural. Try other punctuation or restructure the sentence."
        ),
        related_rule=RuleType.EM_DASH,
    ),
    RuleType.MARKDOWN: Suggestion(
        category=SuggestionCategory.FORMATTING,
        priority=Priority.HIGH,
        title="Strip leftover Markdown",
        description=(
            "Remove Markdown syntax such as ##, ** and []() so the "
            "text is clean prose."
        ),
        related_rule=RuleType.MARKDOWN,
    ),
    RuleType.EMOJI: Suggestion(
        category=SuggestionCategory.FORMATTING,
        priority=Priority.LOW,
        title="Use emoji sparingly",
        description=(
            "Dense decorative emoji is typical of generated posts; keep "
            "only the ones that carry meaning."
        ),
        related_rule=RuleType.EMOJI,
    ),
    RuleType.KNOWLEDGE_CUTOFF: Suggestion(
        category=SuggestionCategory.AUTHENTICITY,
        priority=Priority.HIGH,
        title="Remove knowledge-cutoff phrases",
        description=(
            'Delete phrases such as "As of my last knowledge update" '
            "that only a language model would write."
        ),
        related_rule=RuleType.KNOWLEDGE_CUTOFF,
    ),
    RuleType.COLLABORATIVE: Suggestion(
        category=SuggestionCategory.TONE,
        priority=Priority.HIGH,
        title="Drop the assistant tone",
        description=(
            'Remove assistant sign-offs such as "I hope this helps" and '
            "write in your own voice."
        ),
        related_rule=RuleType.COLLABORATIVE,
    ),
    RuleType.PERFECTIONISM: Suggestion(
        category=SuggestionCategory.AUTHENTICITY,
        priority=Priority.HIGH,
        title="Add personal expression",
        description=(
            "Use the first person, emotional words and some hedging so "
            "the text sounds like a person wrote it."
        ),
        examples=[
            SuggestionExample(
                before="The solution is optimal and will work perfectly.",
                after=(
                    "I think this solution should work well, though we "
                    "might need to adjust it."
                ),
                reason="A personal view and some doubt read as human",
            )
        ],
        related_rule=RuleType.PERFECTIONISM,
    ),
}


def generate_suggestions(results: list[RuleResult]) -> list[Suggestion]:
    """One template suggestion per detected rule, in result order."""
    suggestions: list[Suggestion] = []
    for result in results:
        if not result.detected:
            continue
        template = SUGGESTION_TEMPLATES.get(result.rule_type)
        if template is not None:
            suggestions.append(template.model_copy(deep=True))
    return suggestions


def priority_from_rank(rank: int) -> Priority:
    """Map a 1-5 urgency rank (1 most urgent) onto a priority."""
    if rank <= 2:
        return Priority.HIGH
    if rank >= 4:
        return Priority.LOW
    return Priority.MEDIUM


def convert_llm_suggestions(
    llm_suggestions: list[LLMSuggestion],
) -> list[Suggestion]:
    converted: list[Suggestion] = []
    for item in llm_suggestions:
        suggestion = Suggestion(
            category=SuggestionCategory.AUTHENTICITY,
            priority=priority_from_rank(item.priority),
            title=item.title,
            description=item.description,
        )
        if item.original_text and item.suggested_text:
            suggestion.examples.append(
                SuggestionExample(
                    before=item.original_text,
                    after=item.suggested_text,
                    reason=item.reason,
                )
            )
        converted.append(suggestion)
    return converted


def issues_from_results(results: list[RuleResult]) -> list[str]:
    return [r.message for r in results if r.detected]
