"""Sentence length, variance and structural complexity."""

from __future__ import annotations

import math
import re

from aigc_check.statistics.schemas import SentenceStats
from aigc_check.statistics.vocabulary import WORD_RE

# A run of non-terminators plus the terminator run that closes it.
SENTENCE_RE = re.compile(r"[^.。!！?？]+(?:[.。!！?？]+|$)")
HAN_RE = re.compile(
    "[㐀-䶿一-鿿豈-﫿\U00020000-\U0002ebef]"
)

SUBORDINATING_CONJUNCTIONS = (
    "although", "though", "because", "since", "while", "whereas",
    "if", "unless", "until", "when", "whenever", "where", "wherever",
    "after", "before", "as", "that", "which", "who", "whom", "whose",
)
CHINESE_CLAUSE_MARKERS = (
    "虽然", "尽管", "因为", "由于", "如果", "假如", "除非",
    "当", "在...时", "无论", "不管", "只要", "一旦",
)

LENGTH_BUCKETS = ("very_short", "short", "medium", "long", "very_long")


def count_words(sentence: str) -> int:
    """Word count; Han-dominant text counts two characters per word."""
    han = len(HAN_RE.findall(sentence))
    letters = sum(1 for ch in sentence if ch.isalpha())
    if letters and han / letters > 0.5:
        return (han + 1) // 2
    return len(WORD_RE.findall(sentence))


def comma_count(sentence: str) -> int:
    return sentence.count(",") + sentence.count("，")


def is_complex(sentence: str) -> bool:
    lowered = sentence.lower()
    if any(f" {conj} " in lowered for conj in SUBORDINATING_CONJUNCTIONS):
        return True
    if any(marker in lowered for marker in CHINESE_CLAUSE_MARKERS):
        return True
    return comma_count(lowered) >= 2


def length_bucket(length: int) -> str:
    if length < 5:
        return "very_short"
    if length < 11:
        return "short"
    if length < 21:
        return "medium"
    if length < 36:
        return "long"
    return "very_long"


def unique_word_ratio(sentence: str) -> float:
    words = WORD_RE.findall(sentence.lower())
    if not words:
        return 0.0
    return len(set(words)) / len(words)


def split_sentences(text: str) -> list[str]:
    """Sentences of more than one word, split per line then on punctuation."""
    sentences: list[str] = []
    for paragraph in text.split("\n"):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        for m in SENTENCE_RE.finditer(paragraph):
            part = m.group().strip()
            if part and count_words(part) > 1:
                sentences.append(part)
    return sentences


def _sentence_complexity(sentence: str) -> float:
    score = 0.0
    words = count_words(sentence)
    if 10 <= words <= 25:
        score += 30
    elif 5 <= words <= 35:
        score += 20
    else:
        score += 10
    if is_complex(sentence):
        score += 25
    commas = comma_count(sentence)
    if 1 <= commas <= 3:
        score += 15
    elif commas > 3:
        score += 10
    return score + unique_word_ratio(sentence) * 30


def complexity_score(
    sentences: list[str], avg_length: float, std_dev: float
) -> float:
    """Mean per-sentence complexity plus a length-variation bonus, 0-100."""
    if not sentences:
        return 0.0
    total = sum(_sentence_complexity(s) for s in sentences)
    avg = total / len(sentences)
    if avg_length > 0:
        avg += min(std_dev / avg_length * 20, 15)
    return max(0.0, min(100.0, avg))


class SentenceAnalyzer:
    """Computes ``SentenceStats`` for a text."""

    def analyze(self, text: str) -> SentenceStats:
        sentences = split_sentences(text)
        if not sentences:
            return SentenceStats()

        lengths = [count_words(s) for s in sentences]
        n = len(sentences)
        avg = sum(lengths) / n
        variance = sum((x - avg) ** 2 for x in lengths) / n
        std_dev = math.sqrt(variance)

        questions = sum(1 for s in sentences if s.endswith(("?", "？")))
        exclamations = sum(1 for s in sentences if s.endswith(("!", "！")))
        complex_count = sum(1 for s in sentences if is_complex(s))

        distribution = dict.fromkeys(LENGTH_BUCKETS, 0)
        for length in lengths:
            distribution[length_bucket(length)] += 1

        return SentenceStats(
            total_sentences=n,
            average_length=round(avg, 2),
            length_std_dev=round(std_dev, 2),
            length_variance=round(variance, 2),
            min_length=min(lengths),
            max_length=max(lengths),
            complexity_score=round(complexity_score(sentences, avg, std_dev), 2),
            complex_sentence_ratio=round(complex_count / n, 2),
            simple_sentence_ratio=round((n - complex_count) / n, 2),
            question_ratio=round(questions / n, 2),
            exclamation_ratio=round(exclamations / n, 2),
            length_distribution=distribution,
        )
