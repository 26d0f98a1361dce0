"""Emoji density."""

from __future__ import annotations

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import Match, Position, RuleResult
from aigc_check.detection.signals.base import SignalDetector

EMOJI_RANGES: tuple[tuple[int, int], ...] = (
    (0x1F600, 0x1F64F),  # emoticons
    (0x1F300, 0x1F5FF),  # symbols & pictographs
    (0x1F680, 0x1F6FF),  # transport & map
    (0x1F1E0, 0x1F1FF),  # flags
    (0x2600, 0x26FF),  # misc symbols
    (0x2700, 0x27BF),  # dingbats
    (0xFE00, 0xFE0F),  # variation selectors
    (0x1F900, 0x1F9FF),  # supplemental symbols & pictographs
    (0x1FA70, 0x1FAFF),  # symbols & pictographs extended-A
)


def is_emoji(ch: str) -> bool:
    cp = ord(ch)
    return any(lo <= cp <= hi for lo, hi in EMOJI_RANGES)


class EmojiDetector(SignalDetector):
    rule_type = RuleType.EMOJI
    name = "Emoji anomalies"
    description = "Flags heavy emoji use in running text"

    def check(self, text: str) -> RuleResult:
        matches: list[Match] = []
        line, col = 1, 1
        for offset, ch in enumerate(text):
            if is_emoji(ch):
                pos = Position(line=line, column=col, offset=offset, length=1)
                matches.append(self._match(text, pos, "Emoji"))
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1
        return self._threshold_result(matches, "emoji")
