"""Vocabulary diversity: TTR, MATTR, hapax ratio and Yule's K."""

from __future__ import annotations

import re
from collections import Counter

from aigc_check.constants import (
    HIGH_FREQUENCY_MIN_COUNT,
    HIGH_FREQUENCY_TOP_N,
    MATTR_WINDOW,
)
from aigc_check.statistics.schemas import VocabularyStats, WordFrequency

# Runs of letters and digits (``\w`` minus underscore).
WORD_RE = re.compile(r"[^\W_]+")

STOP_WORDS = frozenset({
    # English
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare",
    "to", "of", "in", "for", "on", "with", "at", "by", "from", "up",
    "about", "into", "through", "during", "before", "after", "above",
    "below", "between", "under", "again", "further", "then", "once",
    "here", "there", "when", "where", "why", "how", "all", "each",
    "few", "more", "most", "other", "some", "such", "no", "nor", "not",
    "only", "own", "same", "so", "than", "too", "very", "just", "and",
    "but", "if", "or", "because", "as", "until", "while", "although",
    "though", "this", "that", "these", "those",
    "it", "its", "he", "him", "his", "she", "her", "hers", "they",
    "them", "their", "theirs", "we", "us", "our", "ours", "you", "your",
    "yours", "i", "me", "my", "mine", "what", "which", "who", "whom",
    # Chinese
    "的", "了", "是", "在", "我", "有", "和", "就", "不", "人",
    "都", "一", "一个", "上", "也", "很", "到", "说", "要", "去",
    "你", "会", "着", "没有", "看", "好", "自己", "这", "他", "她",
    "它", "们", "那", "还", "被", "把", "让", "给", "从", "向",
    "对", "与", "为", "以", "及", "等", "但", "而", "或", "且",
    "因为", "所以", "如果", "虽然", "但是", "然后", "于是",
})


def content_words(text: str) -> list[str]:
    """Lowercased letter/digit runs minus stop words and stray letters.

    Single ASCII characters are dropped; a single non-ASCII character
    (e.g. one Han character) counts as a word.
    """
    return [
        token
        for token in WORD_RE.findall(text.lower())
        if (len(token) > 1 or not token.isascii()) and token not in STOP_WORDS
    ]


def moving_average_ttr(words: list[str], window: int = MATTR_WINDOW) -> float:
    """Mean TTR over every ``window``-sized slice of ``words``."""
    if not words:
        return 0.0
    if len(words) <= window:
        return len(set(words)) / len(words)
    counts = Counter(words[:window])
    total = len(counts) / window
    steps = 1
    for i in range(window, len(words)):
        outgoing = words[i - window]
        counts[outgoing] -= 1
        if counts[outgoing] == 0:
            del counts[outgoing]
        counts[words[i]] += 1
        total += len(counts) / window
        steps += 1
    return total / steps


def yule_richness(freq: Counter[str], total_words: int) -> float:
    """Yule's K rescaled so that larger means richer: 200 / (K + 10)."""
    if total_words == 0:
        return 0.0
    m1 = float(total_words)
    m2 = float(sum(f * f for f in freq.values()))
    if m1 * m1 - m2 == 0:
        return 0.0
    k = 10000 * (m2 - m1) / (m1 * m1)
    return 200 / (k + 10)


class VocabularyAnalyzer:
    """Computes ``VocabularyStats`` for a text."""

    def analyze(self, text: str) -> VocabularyStats:
        words = content_words(text)
        if not words:
            return VocabularyStats()

        freq = Counter(words)
        total = len(words)
        unique = len(freq)
        distribution = Counter(freq.values())
        hapax = distribution.get(1, 0)

        return VocabularyStats(
            total_words=total,
            unique_words=unique,
            ttr=unique / total,
            standardized_ttr=moving_average_ttr(words),
            hapax_legomena=hapax,
            hapax_ratio=hapax / unique,
            richness=yule_richness(freq, total),
            frequency_distribution=dict(distribution),
            high_frequency_words=self._high_frequency(freq),
        )

    @staticmethod
    def _high_frequency(freq: Counter[str]) -> list[WordFrequency]:
        ranked = sorted(
            (
                (word, count)
                for word, count in freq.items()
                if count >= HIGH_FREQUENCY_MIN_COUNT
            ),
            key=lambda item: (-item[1], item[0]),
        )
        return [
            WordFrequency(word=word, count=count)
            for word, count in ranked[:HIGH_FREQUENCY_TOP_N]
        ]
