"""Pydantic models for dimension scores and multimodal fusion output."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aigc_check.config import LayerWeights
from aigc_check.constants import (
    LEVEL_EXCELLENT_MIN,
    LEVEL_FAIR_MIN,
    LEVEL_GOOD_MIN,
    DetectionMode,
    DimensionLevel,
    RuleType,
)


def level_for(percentage: float) -> DimensionLevel:
    if percentage >= LEVEL_EXCELLENT_MIN:
        return DimensionLevel.EXCELLENT
    if percentage >= LEVEL_GOOD_MIN:
        return DimensionLevel.GOOD
    if percentage >= LEVEL_FAIR_MIN:
        return DimensionLevel.FAIR
    return DimensionLevel.POOR


def percentage_of(score: float, max_score: float) -> float:
    if max_score == 0:
        return 0.0
    return max(0.0, min(100.0, score / max_score * 100))


class DimensionScore(BaseModel):
    """Score of one writing dimension out of its weight."""

    score: float
    max_score: float
    percentage: float
    level: DimensionLevel
    description: str = ""
    issues: list[str] = Field(default_factory=lambda: list[str]())

    @classmethod
    def build(
        cls,
        score: float,
        max_score: float,
        issues: list[str],
        description: str,
    ) -> DimensionScore:
        percentage = percentage_of(score, max_score)
        return cls(
            score=score,
            max_score=max_score,
            percentage=percentage,
            level=level_for(percentage),
            description=description,
            issues=issues,
        )


class DimensionScores(BaseModel):
    vocabulary_diversity: DimensionScore
    sentence_complexity: DimensionScore
    personalization: DimensionScore
    logical_coherence: DimensionScore
    emotional_authenticity: DimensionScore

    def all(self) -> list[DimensionScore]:
        return [
            self.vocabulary_diversity,
            self.sentence_complexity,
            self.personalization,
            self.logical_coherence,
            self.emotional_authenticity,
        ]


class Score(BaseModel):
    """Total score with its dimension and per-rule breakdown."""

    total: float = Field(ge=0.0, le=100.0)
    dimensions: DimensionScores
    breakdown: dict[RuleType, float] = Field(
        default_factory=lambda: dict[RuleType, float]()
    )


# ── Multimodal ───────────────────────────────────────────


class RuleLayerDetails(BaseModel):
    detected_rules_count: int = 0
    total_rules_count: int = 0
    red_flag_count: int = 0
    main_issues: list[RuleType] = Field(
        default_factory=lambda: list[RuleType]()
    )


class StatisticsLayerDetails(BaseModel):
    type_token_ratio: float = 0.0
    vocabulary_richness: float = 0.0
    sentence_length_variance: float = 0.0
    sentence_complexity: float = 0.0
    perplexity_score: float = 0.0
    ai_probability: float = 0.0
    details: list[str] = Field(default_factory=lambda: list[str]())


class SemanticLayerDetails(BaseModel):
    coherence_score: float = 50.0
    personalization_score: float = 50.0
    ai_pattern_score: float = 0.0
    detected_features: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    explanation: str = ""
    from_cache: bool = False


class MultimodalResult(BaseModel):
    """Per-layer scores and the fused outcome."""

    rule_layer_score: float = 0.0
    statistics_layer_score: float = 0.0
    semantic_layer_score: float = 0.0
    final_score: float = 0.0
    confidence: float = 0.0
    layer_weights: LayerWeights = Field(default_factory=LayerWeights)
    detection_mode: DetectionMode = DetectionMode.RULE_ONLY
    rule_layer_details: RuleLayerDetails | None = None
    statistics_layer_details: StatisticsLayerDetails | None = None
    semantic_layer_details: SemanticLayerDetails | None = None
    fusion_explanation: str = ""
