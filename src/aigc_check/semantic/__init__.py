"""Semantic layer — model-backed analysis behind a breaker, retry and cache."""

from aigc_check.semantic._llm_call import LLMCallResult, guarded_llm_call
from aigc_check.semantic.analyzer import SemanticAnalyzer
from aigc_check.semantic.cache import ResponseCache
from aigc_check.semantic.client import Completion, SemanticClient
from aigc_check.semantic.schemas import (
    CoherenceResult,
    DetectedFeature,
    LLMSuggestion,
    RewriteResult,
    SemanticAnalysis,
    StyleResult,
)
from aigc_check.semantic.suggester import Suggester

__all__ = [
    "CoherenceResult",
    "Completion",
    "DetectedFeature",
    "LLMCallResult",
    "LLMSuggestion",
    "ResponseCache",
    "RewriteResult",
    "SemanticAnalysis",
    "SemanticAnalyzer",
    "SemanticClient",
    "StyleResult",
    "Suggester",
    "guarded_llm_call",
]
