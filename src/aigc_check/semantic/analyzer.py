"""Semantic analysis: generation verdict, coherence and personal style.

Transport failures propagate to the caller. A response that cannot be
parsed into the expected shape yields a neutral default instead.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from aigc_check.prompts import (
    ANALYSIS_PROMPT,
    COHERENCE_PROMPT,
    STYLE_PROMPT,
    build_text_prompt,
)
from aigc_check.semantic.client import SemanticClient
from aigc_check.semantic.parsing import parse_json_response
from aigc_check.semantic.schemas import (
    CoherenceResult,
    SemanticAnalysis,
    StyleResult,
)

logger = logging.getLogger(__name__)

UNPARSABLE = "Could not parse the model response"


class SemanticAnalyzer:
    def __init__(self, client: SemanticClient) -> None:
        self._client = client

    async def analyze_text(self, text: str) -> SemanticAnalysis:
        completion = await self._client.complete(
            ANALYSIS_PROMPT, build_text_prompt(text)
        )
        try:
            result = SemanticAnalysis.model_validate(
                parse_json_response(completion.content)
            )
        except (ValueError, ValidationError):
            logger.warning(
                "event=semantic_parse_failed kind=analysis response_len=%d",
                len(completion.content),
            )
            result = SemanticAnalysis(explanation=UNPARSABLE)
        result.from_cache = completion.from_cache
        return result

    async def analyze_coherence(self, text: str) -> CoherenceResult:
        completion = await self._client.complete(
            COHERENCE_PROMPT, build_text_prompt(text)
        )
        try:
            result = CoherenceResult.model_validate(
                parse_json_response(completion.content)
            )
        except (ValueError, ValidationError):
            logger.warning(
                "event=semantic_parse_failed kind=coherence response_len=%d",
                len(completion.content),
            )
            result = CoherenceResult(assessment=UNPARSABLE)
        result.from_cache = completion.from_cache
        return result

    async def analyze_style(self, text: str) -> StyleResult:
        completion = await self._client.complete(
            STYLE_PROMPT, build_text_prompt(text)
        )
        try:
            result = StyleResult.model_validate(
                parse_json_response(completion.content)
            )
        except (ValueError, ValidationError):
            logger.warning(
                "event=semantic_parse_failed kind=style response_len=%d",
                len(completion.content),
            )
            result = StyleResult(assessment=UNPARSABLE)
        result.from_cache = completion.from_cache
        return result
