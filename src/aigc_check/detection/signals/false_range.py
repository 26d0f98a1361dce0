"""Sweeping "from X to Y" range phrases."""

from __future__ import annotations

import logging
import re

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import Match, Position, RuleResult
from aigc_check.detection.signals.base import SignalDetector

logger = logging.getLogger(__name__)


def compile_patterns(patterns: list[str]) -> list[re.Pattern[str]]:
    """Compile each pattern, skipping the ones that fail."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            logger.warning(
                "event=pattern_invalid pattern=%r error=%s", pattern, exc
            )
    return compiled


class FalseRangeDetector(SignalDetector):
    rule_type = RuleType.FALSE_RANGE
    name = "False range expressions"
    description = (
        "Flags 'from X to Y' constructions that imply a spectrum"
        " without a real scale"
    )

    def check(self, text: str) -> RuleResult:
        matches: list[Match] = []
        for regex in compile_patterns(self._config.patterns.false_range):
            for m in regex.finditer(text):
                line, col = self._processor.line_column(text, m.start())
                pos = Position(
                    line=line,
                    column=col,
                    offset=m.start(),
                    length=m.end() - m.start(),
                )
                matches.append(
                    self._match(text, pos, "Possible false range expression")
                )
        return self._threshold_result(matches, "false range expressions")
