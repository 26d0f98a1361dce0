"""Chatbot citation residue: tracking parameters, ghost markers, fake dates."""

from __future__ import annotations

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import RuleResult
from aigc_check.detection.signals.base import SignalDetector


class CitationAnomalyDetector(SignalDetector):
    rule_type = RuleType.CITATION_ANOMALY
    name = "Citation anomalies"
    description = (
        "Flags chatbot UTM parameters, ghost citation markers and"
        " placeholder dates"
    )

    def check(self, text: str) -> RuleResult:
        patterns = self._config.patterns
        matches = [
            *self._literal_matches(
                text, patterns.utm_parameters, "AI tracking parameter: {phrase}"
            ),
            *self._literal_matches(
                text, patterns.ghost_markers, "AI ghost citation marker: {phrase}"
            ),
            *self._literal_matches(
                text, patterns.placeholder_dates, "Placeholder date: {phrase}"
            ),
        ]
        count = len(matches)
        if count:
            return self._result(
                matches=matches,
                count=count,
                detected=True,
                score=0.0,
                message=(
                    f"Found {count} citation anomalies,"
                    " conclusive evidence of generated content"
                ),
            )
        return self._result(
            matches=matches,
            count=0,
            detected=False,
            score=100.0,
            message="No citation anomalies found",
        )
