"""Pydantic models for semantic-layer responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aigc_check.constants import (
    DEFAULT_COHERENCE_SCORE,
    DEFAULT_PERSONALIZATION_SCORE,
    NEUTRAL_AI_PROBABILITY,
    NEUTRAL_SEMANTIC_CONFIDENCE,
)


class DetectedFeature(BaseModel):
    name: str = ""
    description: str = ""
    severity: str = "medium"  # low, medium, high
    score: float = 0.0


class SemanticAnalysis(BaseModel):
    """Model verdict on whether a text was machine generated."""

    ai_probability: float = Field(
        default=NEUTRAL_AI_PROBABILITY, ge=0.0, le=100.0
    )
    confidence: float = Field(
        default=NEUTRAL_SEMANTIC_CONFIDENCE, ge=0.0, le=1.0
    )
    features: list[DetectedFeature] = Field(
        default_factory=lambda: list[DetectedFeature]()
    )
    explanation: str = ""
    suggestions: list[str] = Field(default_factory=lambda: list[str]())
    from_cache: bool = False


class CoherenceIssue(BaseModel):
    type: str = ""
    description: str = ""
    location: str = ""
    suggestion: str = ""


class CoherenceResult(BaseModel):
    score: float = Field(default=DEFAULT_COHERENCE_SCORE, ge=0.0, le=100.0)
    issues: list[CoherenceIssue] = Field(
        default_factory=lambda: list[CoherenceIssue]()
    )
    assessment: str = ""
    from_cache: bool = False


class StyleResult(BaseModel):
    personalization_score: float = Field(
        default=DEFAULT_PERSONALIZATION_SCORE, ge=0.0, le=100.0
    )
    style_features: list[str] = Field(default_factory=lambda: list[str]())
    missing_features: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    assessment: str = ""
    from_cache: bool = False


class LLMSuggestion(BaseModel):
    """Suggestion as returned by the model; priority 1 is most urgent."""

    type: str = "general"
    priority: int = 3
    title: str = ""
    description: str = ""
    original_text: str = ""
    suggested_text: str = ""
    reason: str = ""


class Change(BaseModel):
    original: str = ""
    modified: str = ""
    reason: str = ""


class RewriteResult(BaseModel):
    rewritten_text: str
    changes: list[Change] = Field(default_factory=lambda: list[Change]())
    explanation: str = ""
