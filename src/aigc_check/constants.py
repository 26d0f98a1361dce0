"""Shared constants — single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so JSON output and YAML config
keys work unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class RuleType(StrEnum):
    """Identity of each heuristic signal detector."""

    HIGH_FREQ_WORDS = "high_freq_words"
    SENTENCE_STARTERS = "sentence_starters"
    FALSE_RANGE = "false_range"
    CITATION_ANOMALY = "citation_anomaly"
    EM_DASH = "em_dash"
    MARKDOWN = "markdown"
    EMOJI = "emoji"
    KNOWLEDGE_CUTOFF = "knowledge_cutoff"
    COLLABORATIVE = "collaborative"
    PERFECTIONISM = "perfectionism"


class Severity(StrEnum):
    """Severity attached to a rule and its result."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class RiskLevel(StrEnum):
    """Risk tier derived from the final score."""

    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DimensionLevel(StrEnum):
    """Four-bucket label for a dimension percentage."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class DetectionMode(StrEnum):
    """Which analysis layers contributed to a multimodal result."""

    RULE_ONLY = "rule_only"
    RULE_STATISTICS = "rule_statistics"
    MULTIMODAL = "multimodal"


class SuggestionCategory(StrEnum):
    """Area of the text a suggestion addresses."""

    VOCABULARY = "vocabulary"
    SENTENCE = "sentence"
    TONE = "tone"
    STRUCTURE = "structure"
    AUTHENTICITY = "authenticity"
    FORMATTING = "formatting"


class Priority(StrEnum):
    """Suggestion priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class StageOutcome(StrEnum):
    """Outcome of an individual pipeline stage execution."""

    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class OutputFormat(StrEnum):
    """Report rendering formats."""

    TEXT = "text"
    JSON = "json"


# ── Rule scoring ─────────────────────────────────────────

SCORE_MAX = 100.0
SCORE_MIN = 0.0

# Points deducted per occurrence beyond a rule's threshold.
RULE_DEDUCTION_SLOPES: dict[RuleType, float] = {
    RuleType.HIGH_FREQ_WORDS: 10.0,
    RuleType.SENTENCE_STARTERS: 8.0,
    RuleType.FALSE_RANGE: 15.0,
    RuleType.EM_DASH: 5.0,  # per unit of density per 1000 chars
    RuleType.MARKDOWN: 10.0,
    RuleType.EMOJI: 8.0,
    RuleType.COLLABORATIVE: 10.0,
    RuleType.PERFECTIONISM: 10.0,  # per unit of deficit
}

# Any single match is conclusive for these rules.
ABSOLUTE_RULES = frozenset({
    RuleType.CITATION_ANOMALY,
    RuleType.KNOWLEDGE_CUTOFF,
})

CONTEXT_WINDOW_CHARS = 50
SENTENCE_CONTEXT_MAX_CHARS = 100
EM_DASH = "—"
EM_DASH_DENSITY_UNIT = 1000

# ── Scoring / red flags ──────────────────────────────────

MIN_RED_FLAG_SCORE = 5.0

# (base_factor, max_deduction_rate)
RED_FLAG_PENALTIES: dict[RuleType, tuple[float, float]] = {
    RuleType.CITATION_ANOMALY: (0.50, 0.50),
    RuleType.KNOWLEDGE_CUTOFF: (0.50, 0.50),
    RuleType.MARKDOWN: (0.80, 0.20),
    RuleType.EMOJI: (0.90, 0.10),
}

# Rules whose penalty scales between base_factor and 1.0 by severity.
SEVERITY_SCALED_RED_FLAGS = frozenset({
    RuleType.CITATION_ANOMALY,
    RuleType.KNOWLEDGE_CUTOFF,
})

RED_FLAG_RULES = frozenset(RED_FLAG_PENALTIES)

# Upper bounds (inclusive) for each risk tier.
RISK_VERY_HIGH_MAX = 40.0
RISK_HIGH_MAX = 60.0
RISK_MEDIUM_MAX = 75.0

LEVEL_EXCELLENT_MIN = 90.0
LEVEL_GOOD_MIN = 75.0
LEVEL_FAIR_MIN = 60.0

# ── Multimodal fusion ────────────────────────────────────

RED_FLAG_CONFIDENCE_BONUS = 0.10
MANY_DETECTED_RULES = 5
MANY_DETECTED_BONUS = 0.15
SOME_DETECTED_RULES = 3
SOME_DETECTED_BONUS = 0.10
DEFAULT_SEMANTIC_CONFIDENCE = 0.5

# ── Statistics ───────────────────────────────────────────

MATTR_WINDOW = 50
HIGH_FREQUENCY_MIN_COUNT = 3
HIGH_FREQUENCY_TOP_N = 20
NGRAM_SIZE = 3
PERPLEXITY_MIN = 1.0
PERPLEXITY_MAX = 500.0
NEUTRAL_PERPLEXITY = 50.0
SHORT_TEXT_CONFIDENCE = 0.3
NGRAM_REPEAT_RATE_LIMIT = 0.3

# Component weights of the composite human-likeness score:
# vocabulary, richness, variance, complexity, perplexity.
STATISTICS_COMPONENT_WEIGHTS = (0.30, 0.15, 0.20, 0.15, 0.20)

# ── Semantic layer / LLM ─────────────────────────────────

NEUTRAL_AI_PROBABILITY = 50.0
NEUTRAL_SEMANTIC_CONFIDENCE = 0.3
DEFAULT_COHERENCE_SCORE = 70.0
DEFAULT_PERSONALIZATION_SCORE = 50.0
MAX_FALLBACK_SUGGESTIONS = 5

CB_LLM_FAILURE_THRESHOLD = 5
CB_LLM_RECOVERY_TIMEOUT = 30

RETRY_MAX_ATTEMPTS = 3
RETRY_INITIAL_WAIT = 1
RETRY_MAX_WAIT = 30

ERROR_TRUNCATION_CHARS = 200
