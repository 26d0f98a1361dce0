"""Plain-text export — a human-readable report for terminals."""

from __future__ import annotations

from aigc_check.constants import Priority, Severity, SuggestionCategory
from aigc_check.scoring.calculator import RISK_DESCRIPTIONS
from aigc_check.services.detection import DetectionResult

RULE_WIDTH = 60
BAR_WIDTH = 20
MAX_MATCHES_SHOWN = 3

DIMENSION_TITLES = {
    "vocabulary_diversity": "Vocabulary diversity",
    "sentence_complexity": "Sentence complexity",
    "personalization": "Personalization",
    "logical_coherence": "Logical coherence",
    "emotional_authenticity": "Emotional authenticity",
}

CATEGORY_TITLES: dict[SuggestionCategory, str] = {
    SuggestionCategory.VOCABULARY: "Vocabulary",
    SuggestionCategory.SENTENCE: "Sentences",
    SuggestionCategory.TONE: "Tone",
    SuggestionCategory.STRUCTURE: "Structure",
    SuggestionCategory.AUTHENTICITY: "Authenticity",
    SuggestionCategory.FORMATTING: "Formatting",
}

_SEVERITY_MARKS: dict[Severity, str] = {
    Severity.CRITICAL: "!!",
    Severity.HIGH: "! ",
    Severity.MEDIUM: "~ ",
    Severity.LOW: "- ",
    Severity.INFO: "  ",
}

_PRIORITY_MARKS: dict[Priority, str] = {
    Priority.HIGH: "[high]",
    Priority.MEDIUM: "[medium]",
    Priority.LOW: "[low]",
}


def bar(percentage: float, width: int = BAR_WIDTH) -> str:
    filled = round(max(0.0, min(100.0, percentage)) / 100 * width)
    return "#" * filled + "." * (width - filled)


def _heading(title: str) -> list[str]:
    return [title, "-" * RULE_WIDTH]


def export_text(result: DetectionResult) -> str:
    lines: list[str] = ["AIGC-Check report", "=" * RULE_WIDTH, ""]

    lines += _heading("Overall score")
    lines.append(f"{result.score.total:.1f} / 100")
    lines.append(bar(result.score.total))
    lines.append("")

    lines += _heading("Risk level")
    lines.append(RISK_DESCRIPTIONS[result.risk_level])
    lines.append("")

    if result.multimodal is not None:
        mm = result.multimodal
        lines += _heading("Layers")
        lines.append(f"Mode: {mm.detection_mode}")
        lines.append(mm.fusion_explanation)
        lines.append(f"Confidence: {mm.confidence:.2f}")
        lines.append("")

    lines += _heading("Dimensions")
    for name, title in DIMENSION_TITLES.items():
        dim = getattr(result.score.dimensions, name)
        lines.append(
            f"{title:<24} {dim.score:5.1f}/{dim.max_score:<3.0f} "
            f"({dim.percentage:3.0f}%) [{dim.level}] {bar(dim.percentage)}"
        )
        lines.extend(f"  * {issue}" for issue in dim.issues)
    lines.append("")

    lines += _heading("Detected issues")
    detected = [r for r in result.rule_results if r.detected]
    if not detected:
        lines.append("No obvious signs of generated text")
    else:
        lines.append(f"{len(detected)} rule(s) fired:")
        lines.append("")
        for rule in detected:
            mark = _SEVERITY_MARKS.get(rule.severity, "  ")
            lines.append(f"{mark} [{rule.severity}] {rule.name}")
            lines.append(f"   Score: {rule.score:.1f}/100")
            lines.append(f"   {rule.message}")
            lines.append(
                f"   Matches: {rule.count} (threshold {rule.threshold})"
            )
            for match in rule.matches[:MAX_MATCHES_SHOWN]:
                lines.append(
                    f"     - line {match.position.line}: {match.text}"
                )
            hidden = len(rule.matches) - MAX_MATCHES_SHOWN
            if hidden > 0:
                lines.append(f"     ... {hidden} more")
            lines.append("")

    if result.suggestions:
        lines += _heading("Suggestions")
        for i, suggestion in enumerate(result.suggestions, 1):
            lines.append(
                f"{i}. {_PRIORITY_MARKS[suggestion.priority]} "
                f"[{CATEGORY_TITLES[suggestion.category]}] "
                f"{suggestion.title}"
            )
            lines.append(f"   {suggestion.description}")
            for example in suggestion.examples:
                lines.append(f"     Before: {example.before}")
                lines.append(f"     After:  {example.after}")
                if example.reason:
                    lines.append(f"     Why:    {example.reason}")
        lines.append("")

    lines.append(f"Processing time: {result.process_time_ms:.0f} ms")
    lines.append(f"Detected at: {result.detected_at:%Y-%m-%d %H:%M:%S}")
    return "\n".join(lines) + "\n"
