"""Tests for dimension scores, red-flag penalties and risk tiers."""

from __future__ import annotations

import pytest

from aigc_check.config import DetectorConfig
from aigc_check.constants import DimensionLevel, RiskLevel, RuleType
from aigc_check.detection.schemas import RuleResult
from aigc_check.scoring import (
    DimensionCalculator,
    red_flag_factor,
    risk_level,
)
from aigc_check.scoring.schemas import level_for, percentage_of


def _result(
    rule_type: RuleType, *, detected: bool = False, score: float = 100.0
) -> RuleResult:
    return RuleResult(
        rule_type=rule_type,
        name=str(rule_type),
        detected=detected,
        score=score,
    )


def _clean() -> list[RuleResult]:
    return [_result(rt) for rt in RuleType]


def _with(*overrides: RuleResult) -> list[RuleResult]:
    by_type = {r.rule_type: r for r in _clean()}
    for r in overrides:
        by_type[r.rule_type] = r
    return list(by_type.values())


class TestDimensions:
    def test_clean_text_scores_full_marks(self) -> None:
        score = DimensionCalculator(DetectorConfig()).calculate(_clean())
        assert score.total == pytest.approx(100.0)
        for dim in score.dimensions.all():
            assert dim.score == dim.max_score
            assert dim.level == DimensionLevel.EXCELLENT
            assert dim.issues == []

    def test_high_freq_words_deduction(self) -> None:
        results = _with(
            _result(RuleType.HIGH_FREQ_WORDS, detected=True, score=30.0)
        )
        dims = DimensionCalculator(DetectorConfig()).calculate_dimensions(
            results
        )
        # 20 - 0.7 * 20 * 0.6
        assert dims.vocabulary_diversity.score == pytest.approx(11.6)
        assert dims.vocabulary_diversity.percentage == pytest.approx(58.0)
        assert dims.vocabulary_diversity.level == DimensionLevel.POOR
        assert dims.vocabulary_diversity.issues == [
            "Overuse of common AI vocabulary"
        ]

    def test_undetected_rule_does_not_deduct(self) -> None:
        results = _with(
            _result(RuleType.HIGH_FREQ_WORDS, detected=False, score=30.0)
        )
        dims = DimensionCalculator(DetectorConfig()).calculate_dimensions(
            results
        )
        assert dims.vocabulary_diversity.score == 20.0

    def test_perfectionism_hits_two_dimensions(self) -> None:
        results = _with(
            _result(RuleType.PERFECTIONISM, detected=True, score=0.0)
        )
        score = DimensionCalculator(DetectorConfig()).calculate(results)
        assert score.dimensions.personalization.score == 0.0
        assert score.dimensions.emotional_authenticity.score == 10.0
        assert score.total == pytest.approx(65.0)

    def test_breakdown_maps_rule_scores(self) -> None:
        results = _with(_result(RuleType.EMOJI, detected=False, score=92.0))
        score = DimensionCalculator(DetectorConfig()).calculate(results)
        assert score.breakdown[RuleType.EMOJI] == 92.0
        assert len(score.breakdown) == 10

    def test_missing_rules_count_as_clean(self) -> None:
        score = DimensionCalculator(DetectorConfig()).calculate([])
        assert score.total == pytest.approx(100.0)


class TestRedFlags:
    def test_citation_halves_total(self) -> None:
        results = _with(
            _result(RuleType.CITATION_ANOMALY, detected=True, score=0.0)
        )
        score = DimensionCalculator(DetectorConfig()).calculate(results)
        assert score.total == pytest.approx(50.0)
        assert risk_level(score.total) == RiskLevel.HIGH

    def test_two_flags_compound(self) -> None:
        results = _with(
            _result(RuleType.CITATION_ANOMALY, detected=True, score=0.0),
            _result(RuleType.KNOWLEDGE_CUTOFF, detected=True, score=0.0),
        )
        score = DimensionCalculator(DetectorConfig()).calculate(results)
        assert score.total == pytest.approx(25.0)
        assert risk_level(score.total) == RiskLevel.VERY_HIGH

    def test_markdown_and_emoji_factors(self) -> None:
        assert red_flag_factor(RuleType.MARKDOWN, 90.0) == pytest.approx(0.98)
        assert red_flag_factor(RuleType.EMOJI, 84.0) == pytest.approx(0.984)
        assert red_flag_factor(RuleType.MARKDOWN, 0.0) == pytest.approx(0.8)

    def test_severity_scaled_factor_bounded_by_base(self) -> None:
        assert red_flag_factor(
            RuleType.CITATION_ANOMALY, 0.0
        ) == pytest.approx(0.5)
        assert red_flag_factor(
            RuleType.KNOWLEDGE_CUTOFF, 100.0
        ) == pytest.approx(1.0)

    def test_floor_applies_when_flag_fired(self) -> None:
        results = [
            _result(rt, detected=True, score=0.0) for rt in RuleType
        ]
        score = DimensionCalculator(DetectorConfig()).calculate(results)
        assert score.total == pytest.approx(5.0)

    def test_no_floor_without_flag(self) -> None:
        results = _with(
            *(
                _result(rt, detected=True, score=0.0)
                for rt in (
                    RuleType.HIGH_FREQ_WORDS,
                    RuleType.SENTENCE_STARTERS,
                    RuleType.EM_DASH,
                    RuleType.PERFECTIONISM,
                    RuleType.FALSE_RANGE,
                    RuleType.COLLABORATIVE,
                )
            )
        )
        score = DimensionCalculator(DetectorConfig()).calculate(results)
        assert score.total == pytest.approx(0.0)

    def test_undetected_flag_ignored(self) -> None:
        results = _with(
            _result(RuleType.CITATION_ANOMALY, detected=False, score=0.0)
        )
        score = DimensionCalculator(DetectorConfig()).calculate(results)
        assert score.total == pytest.approx(100.0)


class TestRiskAndLevels:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (0.0, RiskLevel.VERY_HIGH),
            (40.0, RiskLevel.VERY_HIGH),
            (41.0, RiskLevel.HIGH),
            (60.0, RiskLevel.HIGH),
            (61.0, RiskLevel.MEDIUM),
            (75.0, RiskLevel.MEDIUM),
            (76.0, RiskLevel.LOW),
            (100.0, RiskLevel.LOW),
        ],
    )
    def test_risk_boundaries(
        self, score: float, expected: RiskLevel
    ) -> None:
        assert risk_level(score) == expected

    @pytest.mark.parametrize(
        ("percentage", "expected"),
        [
            (90.0, DimensionLevel.EXCELLENT),
            (89.9, DimensionLevel.GOOD),
            (75.0, DimensionLevel.GOOD),
            (60.0, DimensionLevel.FAIR),
            (59.9, DimensionLevel.POOR),
        ],
    )
    def test_dimension_levels(
        self, percentage: float, expected: DimensionLevel
    ) -> None:
        assert level_for(percentage) == expected

    def test_percentage_of_zero_max(self) -> None:
        assert percentage_of(5.0, 0.0) == 0.0
        assert percentage_of(10.0, 20.0) == 50.0
