"""Overuse of words favoured by generated prose."""

from __future__ import annotations

from collections import defaultdict

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import Match, RuleResult
from aigc_check.detection.signals.base import SignalDetector, excess_score
from aigc_check.text.processor import Token, context_snippet


class HighFreqWordsDetector(SignalDetector):
    rule_type = RuleType.HIGH_FREQ_WORDS
    name = "High-frequency AI vocabulary"
    description = (
        "Flags repeated use of words such as crucial, pivotal and vital"
    )

    def check(self, text: str) -> RuleResult:
        keywords = {
            k.lower(): k for k in self._config.patterns.high_freq_words
        }
        hits: dict[str, list[Token]] = defaultdict(list)
        for token in self._processor.extract_words(text):
            keyword = keywords.get(token.lower)
            if keyword is not None:
                hits[keyword].append(token)

        matches: list[Match] = []
        flagged = 0
        for keyword, tokens in hits.items():
            if len(tokens) < self.threshold:
                continue
            flagged += 1
            reason = (
                f"'{keyword}' appears {len(tokens)} times,"
                f" threshold is {self.threshold}"
            )
            for token in tokens:
                pos = token.position
                matches.append(
                    Match(
                        text=keyword,
                        position=pos,
                        context=context_snippet(text, pos.offset, pos.length),
                        reason=reason,
                    )
                )

        count = len(matches)
        detected = flagged > 0
        if detected:
            message = (
                f"Found {flagged} overused AI keyword(s),"
                f" {count} occurrences in total"
            )
        else:
            message = "No overused AI keywords found"
        return self._result(
            matches=matches,
            count=count,
            detected=detected,
            score=excess_score(count, self.threshold, self.slope),
            message=message,
        )
