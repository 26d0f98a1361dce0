"""Built-in signal detectors."""

from __future__ import annotations

from aigc_check.config import DetectorConfig
from aigc_check.detection.signals.base import (
    Detector,
    SignalDetector,
    clamp_score,
    excess_score,
)
from aigc_check.detection.signals.citation_anomaly import (
    CitationAnomalyDetector,
)
from aigc_check.detection.signals.collaborative import CollaborativeDetector
from aigc_check.detection.signals.em_dash import EmDashDetector
from aigc_check.detection.signals.emoji import EmojiDetector
from aigc_check.detection.signals.false_range import FalseRangeDetector
from aigc_check.detection.signals.high_freq_words import (
    HighFreqWordsDetector,
)
from aigc_check.detection.signals.knowledge_cutoff import (
    KnowledgeCutoffDetector,
)
from aigc_check.detection.signals.markdown import MarkdownDetector
from aigc_check.detection.signals.perfectionism import PerfectionismDetector
from aigc_check.detection.signals.sentence_starters import (
    SentenceStartersDetector,
)
from aigc_check.text.processor import TextProcessor

BUILTIN_DETECTORS: tuple[type[SignalDetector], ...] = (
    HighFreqWordsDetector,
    SentenceStartersDetector,
    FalseRangeDetector,
    CitationAnomalyDetector,
    EmDashDetector,
    MarkdownDetector,
    EmojiDetector,
    KnowledgeCutoffDetector,
    CollaborativeDetector,
    PerfectionismDetector,
)


def build_detectors(config: DetectorConfig) -> list[SignalDetector]:
    """One instance of every built-in detector sharing a processor."""
    processor = TextProcessor()
    return [cls(config, processor) for cls in BUILTIN_DETECTORS]


__all__ = [
    "BUILTIN_DETECTORS",
    "CitationAnomalyDetector",
    "CollaborativeDetector",
    "Detector",
    "EmDashDetector",
    "EmojiDetector",
    "FalseRangeDetector",
    "HighFreqWordsDetector",
    "KnowledgeCutoffDetector",
    "MarkdownDetector",
    "PerfectionismDetector",
    "SentenceStartersDetector",
    "SignalDetector",
    "build_detectors",
    "clamp_score",
    "excess_score",
]
