"""Composite human-likeness estimate from the statistical sub-analyzers."""

from __future__ import annotations

import logging
import math

from aigc_check.constants import STATISTICS_COMPONENT_WEIGHTS
from aigc_check.statistics.perplexity import PerplexityCalculator
from aigc_check.statistics.schemas import (
    PerplexityResult,
    SentenceStats,
    StatisticsResult,
    VocabularyStats,
)
from aigc_check.statistics.sentence import SentenceAnalyzer
from aigc_check.statistics.vocabulary import VocabularyAnalyzer

logger = logging.getLogger(__name__)


# ── Component score maps (each returns 0-100, higher = more human) ──


def vocabulary_score(ttr: float) -> float:
    if ttr < 0.2:
        return 20.0
    if ttr < 0.35:
        return 20 + (ttr - 0.2) / 0.15 * 30
    if ttr < 0.5:
        return 50 + (ttr - 0.35) / 0.15 * 30
    if ttr < 0.7:
        return 80 + (ttr - 0.5) / 0.2 * 15
    return 95.0


def richness_score(richness: float) -> float:
    if richness < 3:
        return 30.0
    if richness < 5:
        return 30 + (richness - 3) / 2 * 30
    if richness < 10:
        return 60 + (richness - 5) / 5 * 25
    return 85 + min((richness - 10) / 10 * 10, 10)


def variance_score(std_dev: float) -> float:
    if std_dev < 3:
        return 30.0
    if std_dev < 8:
        return 30 + (std_dev - 3) / 5 * 35
    if std_dev < 15:
        return 65 + (std_dev - 8) / 7 * 25
    return 90.0


def perplexity_score(perplexity: float) -> float:
    """Penalizes both overly smooth and overly noisy text."""
    if perplexity < 20:
        return 20.0
    if perplexity < 40:
        return 20 + (perplexity - 20) / 20 * 30
    if perplexity < 100:
        return 50 + (perplexity - 40) / 60 * 40
    if perplexity < 200:
        return 90.0
    return 80.0


def composite_confidence(word_count: int, scores: list[float]) -> float:
    """Blend of sample size and agreement between component scores."""
    if word_count < 100:
        sample = word_count / 100 * 0.5
    elif word_count < 500:
        sample = 0.5 + (word_count - 100) / 400 * 0.3
    else:
        sample = 0.8 + min((word_count - 500) / 1000 * 0.2, 0.2)
    if not scores:
        return sample
    mean = sum(scores) / len(scores)
    std = math.sqrt(sum((s - mean) ** 2 for s in scores) / len(scores))
    consistency = 1 - min(std / 50, 0.5)
    return sample * 0.6 + consistency * 0.4


class StatisticsAnalyzer:
    """Runs the vocabulary, sentence and perplexity analyzers over a text."""

    def __init__(self) -> None:
        self._vocabulary = VocabularyAnalyzer()
        self._sentence = SentenceAnalyzer()
        self._perplexity = PerplexityCalculator()

    def analyze(self, text: str) -> StatisticsResult:
        vocab = self._vocabulary.analyze(text)
        sentence = self._sentence.analyze(text)
        perplexity = self._perplexity.calculate(text)
        human, ai_prob, confidence, details = self._composite(
            vocab, sentence, perplexity
        )
        logger.debug(
            "event=statistics_done words=%d sentences=%d human=%.2f",
            vocab.total_words,
            sentence.total_sentences,
            human,
        )
        return StatisticsResult(
            vocabulary=vocab,
            sentence=sentence,
            perplexity=perplexity,
            predictability=self._perplexity.predictability(text),
            entropy_rate=self._perplexity.entropy_rate(text),
            human_score=human,
            ai_probability=ai_prob,
            confidence=confidence,
            details=details,
        )

    @staticmethod
    def _composite(
        vocab: VocabularyStats,
        sentence: SentenceStats,
        perplexity: PerplexityResult,
    ) -> tuple[float, float, float, list[str]]:
        details: list[str] = []
        if vocab.ttr < 0.35:
            details.append("Low vocabulary diversity (TTR < 0.35)")
        elif vocab.ttr > 0.55:
            details.append("Good vocabulary diversity (TTR > 0.55)")
        if vocab.richness < 5:
            details.append("Low vocabulary richness")
        if sentence.length_std_dev < 5:
            details.append("Little variation in sentence length")
        elif sentence.length_std_dev > 15:
            details.append("Rich variation in sentence length")
        if perplexity.score < 30:
            details.append("Low perplexity, text may be overly fluent")
        elif perplexity.score > 100:
            details.append("High perplexity, natural expression")

        scores = [
            vocabulary_score(vocab.ttr),
            richness_score(vocab.richness),
            variance_score(sentence.length_std_dev),
            sentence.complexity_score,
            perplexity_score(perplexity.score),
        ]
        weights = STATISTICS_COMPONENT_WEIGHTS
        human = sum(s * w for s, w in zip(scores, weights, strict=True)) / sum(
            weights
        )
        ai_prob = 1 - human / 100
        confidence = composite_confidence(vocab.total_words, scores)
        return (
            round(human, 2),
            round(ai_prob, 2),
            round(confidence, 2),
            details,
        )
