"""Training-cutoff disclaimers."""

from __future__ import annotations

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import RuleResult
from aigc_check.detection.signals.base import SignalDetector


class KnowledgeCutoffDetector(SignalDetector):
    rule_type = RuleType.KNOWLEDGE_CUTOFF
    name = "Knowledge cutoff phrases"
    description = (
        "Flags disclaimers such as 'As of my last knowledge update'"
    )

    def check(self, text: str) -> RuleResult:
        matches = self._literal_matches(
            text,
            self._config.patterns.knowledge_cutoff,
            "Knowledge cutoff phrase: {phrase}",
        )
        count = len(matches)
        if count:
            return self._result(
                matches=matches,
                count=count,
                detected=True,
                score=0.0,
                message=(
                    f"Found {count} knowledge cutoff phrases,"
                    " conclusive evidence of generated content"
                ),
            )
        return self._result(
            matches=matches,
            count=0,
            detected=False,
            score=100.0,
            message="No knowledge cutoff phrases found",
        )
