"""Model-written improvement suggestions, rewrites and alternative phrasings."""

from __future__ import annotations

import logging
from typing import Any, cast

from pydantic import ValidationError

from aigc_check.constants import MAX_FALLBACK_SUGGESTIONS
from aigc_check.prompts import (
    ALTERNATIVES_PROMPT,
    DEFAULT_REWRITE_INSTRUCTIONS,
    REWRITE_PROMPT,
    SUGGESTIONS_PROMPT,
    build_alternatives_prompt,
    build_rewrite_prompt,
    build_suggestions_prompt,
)
from aigc_check.semantic.client import SemanticClient
from aigc_check.semantic.parsing import (
    parse_json_array_response,
    parse_json_response,
)
from aigc_check.semantic.schemas import LLMSuggestion, RewriteResult

logger = logging.getLogger(__name__)

_LIST_MARKERS = "0123456789.-) "


def fallback_suggestions(issues: list[str]) -> list[LLMSuggestion]:
    """Generic suggestions, one per issue, for an unusable model reply."""
    return [
        LLMSuggestion(
            type="general",
            priority=i + 1,
            title="Suggested improvement",
            description=issue,
            reason="General advice based on the detected problem",
        )
        for i, issue in enumerate(issues[:MAX_FALLBACK_SUGGESTIONS])
    ]


class Suggester:
    def __init__(self, client: SemanticClient) -> None:
        self._client = client

    async def generate_suggestions(
        self, text: str, issues: list[str]
    ) -> list[LLMSuggestion]:
        if not issues:
            return []
        completion = await self._client.complete(
            SUGGESTIONS_PROMPT, build_suggestions_prompt(text, issues)
        )
        try:
            raw = parse_json_array_response(completion.content)
        except ValueError:
            logger.warning(
                "event=semantic_parse_failed kind=suggestions "
                "response_len=%d",
                len(completion.content),
            )
            return fallback_suggestions(issues)

        suggestions: list[LLMSuggestion] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            try:
                suggestions.append(
                    LLMSuggestion.model_validate(cast(dict[str, Any], item))
                )
            except ValidationError:
                continue
        return suggestions

    async def rewrite_text(
        self, text: str, instructions: str = ""
    ) -> RewriteResult:
        completion = await self._client.complete(
            REWRITE_PROMPT,
            build_rewrite_prompt(
                text, instructions or DEFAULT_REWRITE_INSTRUCTIONS
            ),
        )
        try:
            return RewriteResult.model_validate(
                parse_json_response(completion.content)
            )
        except (ValueError, ValidationError):
            logger.warning(
                "event=semantic_parse_failed kind=rewrite response_len=%d",
                len(completion.content),
            )
            return RewriteResult(
                rewritten_text=text,
                explanation=(
                    "Could not parse the model response, "
                    "returning the original text"
                ),
            )

    async def provide_alternatives(
        self, phrase: str, context: str = ""
    ) -> list[str]:
        completion = await self._client.complete(
            ALTERNATIVES_PROMPT,
            build_alternatives_prompt(phrase, context),
            json_mode=False,
        )
        alternatives: list[str] = []
        for line in completion.content.strip().splitlines():
            line = line.strip().lstrip(_LIST_MARKERS)
            if line:
                alternatives.append(line)
        return alternatives
