"""Text normalization and positioned tokenization."""

from aigc_check.text.processor import (
    ProcessedText,
    Sentence,
    TextProcessor,
    Token,
    context_snippet,
    truncate,
)

__all__ = [
    "ProcessedText",
    "Sentence",
    "TextProcessor",
    "Token",
    "context_snippet",
    "truncate",
]
