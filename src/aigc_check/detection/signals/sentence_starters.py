"""Repeated transitional sentence openers."""

from __future__ import annotations

from aigc_check.constants import SENTENCE_CONTEXT_MAX_CHARS, RuleType
from aigc_check.detection.schemas import Match, RuleResult
from aigc_check.detection.signals.base import SignalDetector
from aigc_check.text.processor import truncate

_BOUNDARY_CHARS = frozenset(" ,.，")


def starts_with_phrase(sentence: str, phrase: str) -> bool:
    """Case-insensitive prefix test that stops at a word boundary."""
    sentence = sentence.strip()
    phrase = phrase.strip()
    if not phrase or not sentence.lower().startswith(phrase.lower()):
        return False
    if len(sentence) == len(phrase):
        return True
    return sentence[len(phrase)] in _BOUNDARY_CHARS


class SentenceStartersDetector(SignalDetector):
    rule_type = RuleType.SENTENCE_STARTERS
    name = "Repeated sentence starters"
    description = (
        "Flags sentences opening with Additionally, Furthermore,"
        " Moreover and similar connectives"
    )

    def check(self, text: str) -> RuleResult:
        phrases = self._config.patterns.sentence_starters
        matches: list[Match] = []
        for sentence in self._processor.split_sentences(text):
            for phrase in phrases:
                if starts_with_phrase(sentence.text, phrase):
                    matches.append(
                        Match(
                            text=phrase,
                            position=sentence.position,
                            context=truncate(
                                sentence.text, SENTENCE_CONTEXT_MAX_CHARS
                            ),
                            reason=f"Sentence starts with '{phrase}'",
                        )
                    )
                    break
        return self._threshold_result(matches, "formulaic sentence starters")
