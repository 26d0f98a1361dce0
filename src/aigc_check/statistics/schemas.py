"""Pydantic models for the statistical analysis layer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class WordFrequency(BaseModel):
    word: str
    count: int


class VocabularyStats(BaseModel):
    """Lexical diversity of the content words in a text."""

    total_words: int = 0
    unique_words: int = 0
    ttr: float = 0.0
    standardized_ttr: float = 0.0  # MATTR
    hapax_legomena: int = 0
    hapax_ratio: float = 0.0
    richness: float = 0.0  # 200 / (Yule's K + 10)
    frequency_distribution: dict[int, int] = Field(
        default_factory=lambda: dict[int, int]()
    )
    high_frequency_words: list[WordFrequency] = Field(
        default_factory=lambda: list[WordFrequency]()
    )


class SentenceStats(BaseModel):
    """Sentence length and structure statistics."""

    total_sentences: int = 0
    average_length: float = 0.0
    length_std_dev: float = 0.0
    length_variance: float = 0.0
    min_length: int = 0
    max_length: int = 0
    complexity_score: float = 0.0
    complex_sentence_ratio: float = 0.0
    simple_sentence_ratio: float = 0.0
    question_ratio: float = 0.0
    exclamation_ratio: float = 0.0
    length_distribution: dict[str, int] = Field(
        default_factory=lambda: dict[str, int]()
    )


class PerplexityResult(BaseModel):
    """Trigram-model perplexity estimate.

    Low values (< 30) suggest overly smooth, templated prose; high
    values (> 150) suggest noisy or unstructured text.
    """

    score: float = 0.0
    confidence: float = 0.0
    ngram_count: int = 0
    unique_ngrams: int = 0
    indicators: list[str] = Field(default_factory=lambda: list[str]())


class Predictability(BaseModel):
    """Conditional-entropy view of how predictable the text is."""

    unigram_count: int = 0
    bigram_entropy: float = 0.0
    trigram_entropy: float = 0.0
    entropy_reduction: float = 0.0


class StatisticsResult(BaseModel):
    """Combined statistical estimate. Higher human_score = more human."""

    vocabulary: VocabularyStats = Field(default_factory=VocabularyStats)
    sentence: SentenceStats = Field(default_factory=SentenceStats)
    perplexity: PerplexityResult = Field(default_factory=PerplexityResult)
    predictability: Predictability = Field(default_factory=Predictability)
    entropy_rate: float = 0.0
    human_score: float = 0.0
    ai_probability: float = 0.0
    confidence: float = 0.0
    details: list[str] = Field(default_factory=lambda: list[str]())
