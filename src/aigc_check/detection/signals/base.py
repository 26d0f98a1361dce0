"""Detector capability and the shared scoring helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Protocol, runtime_checkable

from aigc_check.config import DetectorConfig, RuleConfig
from aigc_check.constants import (
    RULE_DEDUCTION_SLOPES,
    SCORE_MAX,
    SCORE_MIN,
    RuleType,
)
from aigc_check.detection.schemas import Match, Position, RuleResult
from aigc_check.text.processor import TextProcessor, context_snippet


@runtime_checkable
class Detector(Protocol):
    """Anything the rule engine can dispatch."""

    rule_type: RuleType
    name: str
    description: str

    def check(self, text: str) -> RuleResult: ...


def clamp_score(score: float) -> float:
    return max(SCORE_MIN, min(SCORE_MAX, score))


def excess_score(count: float, threshold: float, slope: float) -> float:
    """100 up to the threshold, then ``slope`` points off per unit above it."""
    if count <= threshold:
        return SCORE_MAX
    return clamp_score(SCORE_MAX - slope * (count - threshold))


class SignalDetector(ABC):
    """Base for the built-in detectors.

    Subclasses set ``rule_type``, ``name`` and ``description`` and
    implement ``check``. Detectors hold only read-only configuration,
    so one instance may serve concurrent calls.
    """

    rule_type: ClassVar[RuleType]
    name: ClassVar[str]
    description: ClassVar[str]

    def __init__(
        self,
        config: DetectorConfig,
        processor: TextProcessor | None = None,
    ) -> None:
        self._config = config
        self._processor = processor or TextProcessor()

    @property
    def rule_config(self) -> RuleConfig:
        return self._config.rule(self.rule_type)

    @property
    def threshold(self) -> int:
        return self.rule_config.threshold

    @property
    def slope(self) -> float:
        return RULE_DEDUCTION_SLOPES.get(self.rule_type, 10.0)

    @abstractmethod
    def check(self, text: str) -> RuleResult: ...

    def _result(
        self,
        *,
        matches: list[Match],
        count: int,
        detected: bool,
        score: float,
        message: str,
    ) -> RuleResult:
        return RuleResult(
            rule_type=self.rule_type,
            name=self.name,
            description=self.description,
            detected=detected,
            score=clamp_score(score),
            severity=self.rule_config.severity,
            matches=matches,
            count=count,
            threshold=self.threshold,
            message=message,
        )

    def _threshold_result(
        self, matches: list[Match], noun: str
    ) -> RuleResult:
        """Standard ``count >= threshold`` decision over ``matches``."""
        count = len(matches)
        detected = count >= self.threshold
        if detected:
            message = (
                f"Found {count} {noun}, threshold is {self.threshold}"
            )
        else:
            message = f"Found {count} {noun}, within normal range"
        return self._result(
            matches=matches,
            count=count,
            detected=detected,
            score=excess_score(count, self.threshold, self.slope),
            message=message,
        )

    def _literal_matches(
        self, text: str, phrases: list[str], reason: str
    ) -> list[Match]:
        """Case-insensitive literal search for each phrase."""
        matches: list[Match] = []
        for phrase in phrases:
            for pos in self._processor.find_pattern(text, phrase):
                matches.append(
                    self._match(text, pos, reason.format(phrase=phrase))
                )
        return matches

    @staticmethod
    def _match(text: str, pos: Position, reason: str) -> Match:
        return Match(
            text=text[pos.offset : pos.offset + pos.length],
            position=pos,
            context=context_snippet(text, pos.offset, pos.length),
            reason=reason,
        )
