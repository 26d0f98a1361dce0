"""Absence of personal voice: pronouns, feelings, hedges.

This detector inverts the usual polarity. It counts personalization
markers and fires when there are too *few* of them.
"""

from __future__ import annotations

import re

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import Match, Position, RuleResult
from aigc_check.detection.signals.base import SignalDetector


def _marker_regex(marker: str) -> re.Pattern[str]:
    """Latin markers match whole words; Han markers match anywhere."""
    escaped = re.escape(marker)
    if marker.isascii():
        return re.compile(rf"(?<![\w'-]){escaped}(?![\w'-])", re.IGNORECASE)
    return re.compile(escaped)


class PerfectionismDetector(SignalDetector):
    rule_type = RuleType.PERFECTIONISM
    name = "Perfectionism trap"
    description = (
        "Flags text lacking first-person voice, emotional words and"
        " uncertainty markers"
    )

    def check(self, text: str) -> RuleResult:
        patterns = self._config.patterns
        groups = (
            (patterns.first_person_pronouns, "First-person pronoun"),
            (patterns.emotional_words, "Emotional word"),
            (patterns.uncertainty_markers, "Uncertainty marker"),
        )
        matches: list[Match] = []
        for markers, reason in groups:
            for marker in markers:
                matches.extend(self._find(text, marker, reason))

        total = len(matches)
        deficit = self.threshold - total
        if deficit > 0:
            return self._result(
                matches=matches,
                count=total,
                detected=True,
                score=100.0 - self.slope * deficit,
                message=(
                    f"Lacks personal voice: only {total} personalization"
                    f" markers, threshold is {self.threshold}"
                ),
            )
        return self._result(
            matches=matches,
            count=total,
            detected=False,
            score=100.0,
            message=f"Found {total} personalization markers, normal",
        )

    def _find(self, text: str, marker: str, reason: str) -> list[Match]:
        found: list[Match] = []
        for m in _marker_regex(marker).finditer(text):
            line, col = self._processor.line_column(text, m.start())
            pos = Position(
                line=line,
                column=col,
                offset=m.start(),
                length=m.end() - m.start(),
            )
            found.append(self._match(text, pos, reason))
        return found
