"""Statistical text analysis — vocabulary, sentence structure, perplexity."""

from aigc_check.statistics.analyzer import StatisticsAnalyzer
from aigc_check.statistics.perplexity import PerplexityCalculator
from aigc_check.statistics.schemas import (
    PerplexityResult,
    Predictability,
    SentenceStats,
    StatisticsResult,
    VocabularyStats,
    WordFrequency,
)
from aigc_check.statistics.sentence import SentenceAnalyzer
from aigc_check.statistics.vocabulary import VocabularyAnalyzer

__all__ = [
    "PerplexityCalculator",
    "PerplexityResult",
    "Predictability",
    "SentenceAnalyzer",
    "SentenceStats",
    "StatisticsAnalyzer",
    "StatisticsResult",
    "VocabularyAnalyzer",
    "VocabularyStats",
    "WordFrequency",
]
