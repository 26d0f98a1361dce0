"""Markdown syntax left over from a chat interface."""

from __future__ import annotations

from aigc_check.constants import RuleType
from aigc_check.detection.schemas import Match, Position, RuleResult
from aigc_check.detection.signals.base import SignalDetector
from aigc_check.detection.signals.false_range import compile_patterns


class MarkdownDetector(SignalDetector):
    rule_type = RuleType.MARKDOWN
    name = "Markdown residue"
    description = "Flags headings, bold markers, code fences and links"

    def check(self, text: str) -> RuleResult:
        patterns = self._config.patterns
        matches: list[Match] = []
        for marker in patterns.markdown_markers:
            for pos in self._processor.find_pattern(
                text, marker, case_sensitive=True
            ):
                matches.append(
                    self._match(text, pos, f"Markdown marker: {marker}")
                )
        for regex in compile_patterns(patterns.markdown_regexes):
            for m in regex.finditer(text):
                line, col = self._processor.line_column(text, m.start())
                pos = Position(
                    line=line,
                    column=col,
                    offset=m.start(),
                    length=m.end() - m.start(),
                )
                matches.append(self._match(text, pos, "Markdown link"))
        matches.sort(key=lambda m: m.position.offset)
        return self._threshold_result(matches, "markdown markers")
