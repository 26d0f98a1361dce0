"""Dimension scoring, red-flag penalties and risk tiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from aigc_check.config import DetectorConfig, DimensionWeights
from aigc_check.constants import (
    MIN_RED_FLAG_SCORE,
    RED_FLAG_PENALTIES,
    RISK_HIGH_MAX,
    RISK_MEDIUM_MAX,
    RISK_VERY_HIGH_MAX,
    SCORE_MAX,
    SCORE_MIN,
    SEVERITY_SCALED_RED_FLAGS,
    RiskLevel,
    RuleType,
)
from aigc_check.detection.schemas import RuleResult
from aigc_check.scoring.schemas import DimensionScore, DimensionScores, Score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Deduction:
    """A rule feeding a dimension with a share of its maximum."""

    rule_type: RuleType
    share: float
    issue: str


@dataclass(frozen=True)
class DimensionSpec:
    deductions: tuple[Deduction, ...]
    description: str  # shown when issues were found
    clean_description: str  # shown when none were


DIMENSION_ROUTES: dict[str, DimensionSpec] = {
    "vocabulary_diversity": DimensionSpec(
        deductions=(
            Deduction(
                RuleType.HIGH_FREQ_WORDS,
                0.6,
                "Overuse of common AI vocabulary",
            ),
            Deduction(
                RuleType.SENTENCE_STARTERS,
                0.4,
                "Repeated sentence-opening patterns",
            ),
        ),
        description="Richness and variety of word choice",
        clean_description=(
            "Good vocabulary diversity, no obvious generated patterns"
        ),
    ),
    "sentence_complexity": DimensionSpec(
        deductions=(
            Deduction(
                RuleType.SENTENCE_STARTERS,
                0.5,
                "Monotonous sentence structure",
            ),
            Deduction(
                RuleType.EM_DASH,
                0.5,
                "Em dashes overused, sentences feel unnatural",
            ),
        ),
        description="Variety and complexity of sentence structure",
        clean_description="Sentence structure is varied and natural",
    ),
    "personalization": DimensionSpec(
        deductions=(
            Deduction(
                RuleType.PERFECTIONISM,
                1.0,
                "Lacks first person, emotional words and hedging",
            ),
        ),
        description="Degree of personal style and subjective voice",
        clean_description="Personal voice is present, reads as human",
    ),
    "logical_coherence": DimensionSpec(
        deductions=(
            Deduction(
                RuleType.FALSE_RANGE,
                1.0,
                "Range expressions without a coherent scale",
            ),
        ),
        description="Naturalness and coherence of the argument",
        clean_description="Logic flows naturally",
    ),
    "emotional_authenticity": DimensionSpec(
        deductions=(
            Deduction(
                RuleType.COLLABORATIVE,
                0.5,
                "Assistant-style collaborative tone",
            ),
            Deduction(
                RuleType.PERFECTIONISM,
                0.5,
                "Too little emotion, overly objective",
            ),
        ),
        description="Authenticity of emotional expression",
        clean_description="Emotional expression feels genuine",
    ),
}


def risk_level(score: float) -> RiskLevel:
    """Tier boundaries are inclusive upper bounds: 40, 60, 75."""
    if score <= RISK_VERY_HIGH_MAX:
        return RiskLevel.VERY_HIGH
    if score <= RISK_HIGH_MAX:
        return RiskLevel.HIGH
    if score <= RISK_MEDIUM_MAX:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


RISK_DESCRIPTIONS: dict[RiskLevel, str] = {
    RiskLevel.VERY_HIGH: "Very high risk: almost certainly generated",
    RiskLevel.HIGH: "High risk: likely generated",
    RiskLevel.MEDIUM: "Medium risk: may contain generated content",
    RiskLevel.LOW: "Low risk: probably written by a person",
}


def red_flag_factor(rule_type: RuleType, rule_score: float) -> float:
    """Multiplier applied to the total for one detected red-flag rule."""
    base, max_rate = RED_FLAG_PENALTIES[rule_type]
    severity = max(0.0, min(1.0, (SCORE_MAX - rule_score) / SCORE_MAX))
    if rule_type in SEVERITY_SCALED_RED_FLAGS:
        return max(base, 1 - (1 - base) * severity)
    return 1 - severity * max_rate


class DimensionCalculator:
    """Turns rule results into five dimension scores and a total."""

    def __init__(self, config: DetectorConfig) -> None:
        self._weights: DimensionWeights = config.weights

    def calculate(self, results: list[RuleResult]) -> Score:
        dimensions = self.calculate_dimensions(results)
        total = self.calculate_total_with_red_flags(dimensions, results)
        return Score(
            total=total,
            dimensions=dimensions,
            breakdown={r.rule_type: r.score for r in results},
        )

    def calculate_dimensions(
        self, results: list[RuleResult]
    ) -> DimensionScores:
        by_type = {r.rule_type: r for r in results}
        scored = {
            name: self._dimension(
                spec, getattr(self._weights, name), by_type
            )
            for name, spec in DIMENSION_ROUTES.items()
        }
        return DimensionScores(**scored)

    @staticmethod
    def _dimension(
        spec: DimensionSpec,
        max_score: float,
        by_type: dict[RuleType, RuleResult],
    ) -> DimensionScore:
        score = max_score
        issues: list[str] = []
        for deduction in spec.deductions:
            result = by_type.get(deduction.rule_type)
            if result is None or not result.detected:
                continue
            score -= (
                (SCORE_MAX - result.score) / SCORE_MAX
                * max_score
                * deduction.share
            )
            issues.append(deduction.issue)
        return DimensionScore.build(
            score=max(SCORE_MIN, score),
            max_score=max_score,
            issues=issues,
            description=spec.description if issues else spec.clean_description,
        )

    @staticmethod
    def calculate_total(dimensions: DimensionScores) -> float:
        total = sum(d.score for d in dimensions.all())
        return max(SCORE_MIN, min(SCORE_MAX, total))

    def calculate_total_with_red_flags(
        self, dimensions: DimensionScores, results: list[RuleResult]
    ) -> float:
        """Multiply detected red-flag factors into the dimension total.

        The result is floored at ``MIN_RED_FLAG_SCORE`` whenever a red
        flag fired, so stacked flags stay distinguishable from zero.
        """
        total = self.calculate_total(dimensions)
        penalized = False
        for result in results:
            if result.rule_type not in RED_FLAG_PENALTIES or not result.detected:
                continue
            factor = red_flag_factor(result.rule_type, result.score)
            total *= factor
            penalized = True
            logger.debug(
                "event=red_flag rule=%s factor=%.3f",
                result.rule_type,
                factor,
            )
        if penalized:
            total = max(MIN_RED_FLAG_SCORE, total)
        return min(SCORE_MAX, total)
