"""Em-dash density per thousand characters."""

from __future__ import annotations

from aigc_check.constants import EM_DASH, EM_DASH_DENSITY_UNIT, RuleType
from aigc_check.detection.schemas import RuleResult
from aigc_check.detection.signals.base import SignalDetector, excess_score


class EmDashDetector(SignalDetector):
    rule_type = RuleType.EM_DASH
    name = "Em-dash density"
    description = "Flags em dashes (—) used more densely than human prose"

    def check(self, text: str) -> RuleResult:
        if not text:
            return self._result(
                matches=[],
                count=0,
                detected=False,
                score=100.0,
                message="Empty text",
            )

        limit = float(self.threshold)
        matches = self._literal_matches(text, [EM_DASH], "Em dash usage")
        count = len(matches)
        density = count * EM_DASH_DENSITY_UNIT / len(text)
        detected = density >= limit
        if detected:
            message = (
                f"Em-dash density {density:.2f} per 1000 chars"
                f" exceeds {limit:.2f}"
            )
        else:
            message = f"Em-dash density {density:.2f} per 1000 chars, normal"
        return self._result(
            matches=matches,
            count=count,
            detected=detected,
            score=excess_score(density, limit, self.slope),
            message=message,
        )
