"""Trigram perplexity with Laplace smoothing, plus entropy measures."""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import TypeAlias

from aigc_check.constants import (
    NEUTRAL_PERPLEXITY,
    NGRAM_REPEAT_RATE_LIMIT,
    NGRAM_SIZE,
    PERPLEXITY_MAX,
    PERPLEXITY_MIN,
    SHORT_TEXT_CONFIDENCE,
)
from aigc_check.statistics.schemas import Predictability, PerplexityResult

TOKEN_RE = re.compile(r"[^\W_]+|[.!?。！？，,;；:：]")
SENTENCE_FINAL = frozenset(".!?。！？")
BOS = "<s>"
EOS = "</s>"

NGram: TypeAlias = tuple[str, ...]


def tokenize(text: str) -> list[str]:
    """Lowercase word/punctuation tokens with sentence boundary markers."""
    tokens = [BOS]
    for token in TOKEN_RE.findall(text.lower()):
        tokens.append(token)
        if token in SENTENCE_FINAL:
            tokens.extend((EOS, BOS))
    tokens.append(EOS)
    return tokens


def ngram_counts(tokens: list[str], size: int) -> Counter[NGram]:
    return Counter(
        tuple(tokens[i : i + size]) for i in range(len(tokens) - size + 1)
    )


def conditional_entropy(
    ngrams: Counter[NGram], contexts: Counter[NGram]
) -> float:
    """H(w_n | w_1..w_{n-1}) estimated from raw counts."""
    total_entropy = 0.0
    total_count = 0
    for ngram, count in ngrams.items():
        if len(ngram) < 2:
            continue
        context_count = contexts.get(ngram[:-1], 0)
        if context_count == 0:
            continue
        total_entropy -= count * math.log2(count / context_count)
        total_count += count
    if total_count == 0:
        return 0.0
    return total_entropy / total_count


class PerplexityCalculator:
    """Estimates how predictable a text is under its own trigram model."""

    def __init__(self, ngram_size: int = NGRAM_SIZE, smoothing: float = 1.0) -> None:
        self.ngram_size = ngram_size
        self.smoothing = smoothing

    def calculate(self, text: str) -> PerplexityResult:
        tokens = tokenize(text)
        if len(tokens) < self.ngram_size + 1:
            return PerplexityResult(
                score=NEUTRAL_PERPLEXITY,
                confidence=SHORT_TEXT_CONFIDENCE,
                indicators=["Text too short to estimate perplexity"],
            )

        ngrams = ngram_counts(tokens, self.ngram_size)
        contexts = ngram_counts(tokens, self.ngram_size - 1)
        perplexity = self._perplexity(tokens, ngrams, contexts)

        unique = len(ngrams)
        total = len(tokens) - self.ngram_size + 1
        indicators: list[str] = []
        if 1 - unique / total > NGRAM_REPEAT_RATE_LIMIT:
            indicators.append("High n-gram repetition, little variety")
        if perplexity < 30:
            indicators.append("Low perplexity, text may be templated")
        elif perplexity > 150:
            indicators.append("High perplexity, text may be unstructured")
        else:
            indicators.append("Moderate perplexity, typical of natural writing")

        return PerplexityResult(
            score=round(perplexity, 2),
            confidence=round(self._confidence(len(tokens), unique), 2),
            ngram_count=total,
            unique_ngrams=unique,
            indicators=indicators,
        )

    def _perplexity(
        self,
        tokens: list[str],
        ngrams: Counter[NGram],
        contexts: Counter[NGram],
    ) -> float:
        n = self.ngram_size
        if len(tokens) <= n:
            return NEUTRAL_PERPLEXITY
        vocab_size = len(contexts)
        log_sum = 0.0
        steps = 0
        for i in range(len(tokens) - n + 1):
            gram = tuple(tokens[i : i + n])
            prob = (ngrams[gram] + self.smoothing) / (
                contexts[gram[:-1]] + self.smoothing * vocab_size
            )
            if prob > 0:
                log_sum += math.log2(prob)
                steps += 1
        if steps == 0:
            return NEUTRAL_PERPLEXITY
        perplexity = 2 ** (-log_sum / steps)
        return max(PERPLEXITY_MIN, min(PERPLEXITY_MAX, perplexity))

    @staticmethod
    def _confidence(token_count: int, unique_ngrams: int) -> float:
        if token_count < 50:
            sample = token_count / 50 * 0.4
        elif token_count < 200:
            sample = 0.4 + (token_count - 50) / 150 * 0.3
        elif token_count < 500:
            sample = 0.7 + (token_count - 200) / 300 * 0.2
        else:
            sample = 0.9
        diversity = min(unique_ngrams / token_count * 2, 1.0)
        return sample * 0.7 + diversity * 0.3

    def entropy_rate(self, text: str) -> float:
        """Unigram entropy in bits per token."""
        tokens = tokenize(text)
        if len(tokens) < 2:
            return 0.0
        total = len(tokens)
        entropy = -sum(
            (c / total) * math.log2(c / total)
            for c in Counter(tokens).values()
        )
        return round(entropy, 2)

    def predictability(self, text: str) -> Predictability:
        """Bigram vs trigram conditional entropy.

        A large drop from bigram to trigram entropy means longer
        contexts make the next token much easier to guess.
        """
        tokens = tokenize(text)
        unigrams = ngram_counts(tokens, 1)
        bigrams = ngram_counts(tokens, 2)
        trigrams = ngram_counts(tokens, 3)
        bigram_entropy = conditional_entropy(bigrams, unigrams)
        trigram_entropy = conditional_entropy(trigrams, bigrams)
        return Predictability(
            unigram_count=len(unigrams),
            bigram_entropy=round(bigram_entropy, 2),
            trigram_entropy=round(trigram_entropy, 2),
            entropy_reduction=round(bigram_entropy - trigram_entropy, 2),
        )
