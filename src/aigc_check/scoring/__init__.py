"""Scoring — dimension scores, red-flag penalties, multimodal fusion."""

from aigc_check.scoring.calculator import (
    RISK_DESCRIPTIONS,
    DimensionCalculator,
    red_flag_factor,
    risk_level,
)
from aigc_check.scoring.schemas import (
    DimensionScore,
    DimensionScores,
    MultimodalResult,
    RuleLayerDetails,
    Score,
    SemanticLayerDetails,
    StatisticsLayerDetails,
)

__all__ = [
    "RISK_DESCRIPTIONS",
    "DimensionCalculator",
    "DimensionScore",
    "DimensionScores",
    "MultimodalResult",
    "RuleLayerDetails",
    "Score",
    "SemanticLayerDetails",
    "StatisticsLayerDetails",
    "red_flag_factor",
    "risk_level",
]
