"""Assistant-style sign-offs and offers of further help."""

from __future__ import annotations

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import RuleResult
from aigc_check.detection.signals.base import SignalDetector


class CollaborativeDetector(SignalDetector):
    rule_type = RuleType.COLLABORATIVE
    name = "Collaborative assistant tone"
    description = (
        "Flags phrases like 'I hope this helps' and 'Feel free to'"
    )

    def check(self, text: str) -> RuleResult:
        matches = self._literal_matches(
            text,
            self._config.patterns.collaborative,
            "Collaborative tone: {phrase}",
        )
        return self._threshold_result(matches, "collaborative tone phrases")
