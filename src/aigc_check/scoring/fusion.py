"""Tiered multimodal fusion: confidence gates, layer weights, fused score.

The rule layer always runs. The statistics layer runs when rule
confidence is below ``thresholds.high``; the semantic layer runs when
the mean of rule and statistics confidence is below
``thresholds.medium``. The detection mode, and with it the weight set,
follows from which layers actually produced output.
"""

from __future__ import annotations

from aigc_check.config import (
    RULE_ONLY_WEIGHTS,
    TWO_LAYER_WEIGHTS,
    ConfidenceThresholds,
    LayerWeights,
)
from aigc_check.constants import (
    MANY_DETECTED_BONUS,
    MANY_DETECTED_RULES,
    RED_FLAG_CONFIDENCE_BONUS,
    RED_FLAG_RULES,
    SOME_DETECTED_BONUS,
    SOME_DETECTED_RULES,
    DetectionMode,
)
from aigc_check.detection.schemas import RuleResult
from aigc_check.scoring.schemas import MultimodalResult, RuleLayerDetails, Score


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def count_detected(results: list[RuleResult]) -> int:
    return sum(1 for r in results if r.detected)


def count_red_flags(results: list[RuleResult]) -> int:
    return sum(
        1 for r in results if r.detected and r.rule_type in RED_FLAG_RULES
    )


def rule_layer_details(results: list[RuleResult]) -> RuleLayerDetails:
    return RuleLayerDetails(
        detected_rules_count=count_detected(results),
        total_rules_count=len(results),
        red_flag_count=count_red_flags(results),
        main_issues=[r.rule_type for r in results if r.detected],
    )


def rule_confidence(results: list[RuleResult], score: Score) -> float:
    """Confidence of the rule layer alone, 0-1."""
    confidence = score.total / 100.0
    confidence += count_red_flags(results) * RED_FLAG_CONFIDENCE_BONUS
    detected = count_detected(results)
    if detected >= MANY_DETECTED_RULES:
        confidence += MANY_DETECTED_BONUS
    elif detected >= SOME_DETECTED_RULES:
        confidence += SOME_DETECTED_BONUS
    return _clamp(confidence, 0.0, 1.0)


def needs_statistics(
    rule_conf: float, thresholds: ConfidenceThresholds
) -> bool:
    return rule_conf < thresholds.high


def needs_semantic(
    rule_conf: float,
    stats_conf: float,
    thresholds: ConfidenceThresholds,
) -> bool:
    return (rule_conf + stats_conf) / 2 < thresholds.medium


def detection_mode(
    *, statistics_ran: bool, semantic_ran: bool
) -> DetectionMode:
    if semantic_ran:
        return DetectionMode.MULTIMODAL
    if statistics_ran:
        return DetectionMode.RULE_STATISTICS
    return DetectionMode.RULE_ONLY


def effective_weights(
    mode: DetectionMode,
    configured: LayerWeights,
    *,
    statistics_ran: bool = True,
) -> LayerWeights:
    """Weight set for a mode; a layer that did not run weighs zero."""
    match mode:
        case DetectionMode.RULE_ONLY:
            return RULE_ONLY_WEIGHTS.model_copy()
        case DetectionMode.RULE_STATISTICS:
            return TWO_LAYER_WEIGHTS.model_copy()
        case DetectionMode.MULTIMODAL:
            if statistics_ran:
                return configured.model_copy()
            return configured.model_copy(update={"statistics_layer": 0.0})


def fuse_scores(
    rule_score: float,
    stats_score: float,
    semantic_score: float,
    weights: LayerWeights,
) -> float:
    total_weight = weights.total
    if total_weight == 0:
        return rule_score
    fused = (
        rule_score * weights.rule_layer
        + stats_score * weights.statistics_layer
        + semantic_score * weights.semantic_layer
    ) / total_weight
    return _clamp(fused, 0.0, 100.0)


def fuse_confidence(
    rule_conf: float,
    stats_conf: float,
    semantic_conf: float,
    weights: LayerWeights,
) -> float:
    total_weight = weights.total
    if total_weight == 0:
        return rule_conf
    fused = (
        rule_conf * weights.rule_layer
        + stats_conf * weights.statistics_layer
        + semantic_conf * weights.semantic_layer
    ) / total_weight
    return _clamp(fused, 0.0, 1.0)


def explain_fusion(result: MultimodalResult) -> str:
    match result.detection_mode:
        case DetectionMode.RULE_ONLY:
            return "Rule detection only"
        case DetectionMode.RULE_STATISTICS:
            return (
                f"Rule detection ({result.rule_layer_score:.1f})"
                f" + statistical analysis"
                f" ({result.statistics_layer_score:.1f}) fused"
            )
        case DetectionMode.MULTIMODAL:
            return (
                f"Rule detection ({result.rule_layer_score:.1f})"
                f" + statistical analysis"
                f" ({result.statistics_layer_score:.1f})"
                f" + semantic analysis"
                f" ({result.semantic_layer_score:.1f}) fused"
            )
