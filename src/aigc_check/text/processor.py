"""Text normalization, sentence splitting and positioned word tokens.

Every detector and the statistics layer consume the output of
``TextProcessor.process``. Positions are measured in string
characters: ``line``/``column`` are 1-based, ``offset`` is 0-based.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from aigc_check.constants import CONTEXT_WINDOW_CHARS
from aigc_check.detection.schemas import Position

_SENTENCE_TERMINATORS = frozenset(".!?。！？")
_WORD_PUNCTUATION = frozenset("-'")


@dataclass(frozen=True)
class Token:
    """A maximal run of word characters."""

    text: str
    lower: str
    position: Position


@dataclass(frozen=True)
class Sentence:
    """A sentence span with the tokens it contains."""

    text: str
    position: Position
    words: list[Token] = field(default_factory=lambda: list[Token]())


@dataclass(frozen=True)
class ProcessedText:
    """Output of ``TextProcessor.process``."""

    original: str
    normalized: str
    sentences: list[Sentence]
    words: list[Token]
    lines: list[str]

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def char_count(self) -> int:
        return len(self.original)


def is_word_char(ch: str) -> bool:
    """Letters, digits, hyphen and apostrophe form words."""
    return ch.isalnum() or ch in _WORD_PUNCTUATION


class TextProcessor:
    """Stateless tokenizer shared by all detectors."""

    def process(self, text: str) -> ProcessedText:
        return ProcessedText(
            original=text,
            normalized=self.normalize(text),
            sentences=self.split_sentences(text),
            words=self.extract_words(text),
            lines=text.split("\n"),
        )

    @staticmethod
    def normalize(text: str) -> str:
        """Unify line endings and strip each line."""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return "\n".join(line.strip() for line in text.split("\n"))

    @staticmethod
    def _is_sentence_end(text: str, i: int) -> bool:
        ch = text[i]
        if ch == "\n":
            return True
        if ch in _SENTENCE_TERMINATORS:
            return i + 1 >= len(text) or text[i + 1].isspace()
        return False

    def split_sentences(self, text: str) -> list[Sentence]:
        """Split at terminal punctuation before whitespace/EOF, or at newlines."""
        sentences: list[Sentence] = []
        start = 0
        start_line, start_col = 1, 1
        line, col = 1, 1

        for i, ch in enumerate(text):
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1
            if self._is_sentence_end(text, i):
                self._append_sentence(
                    sentences, text, start, i + 1, start_line, start_col
                )
                start = i + 1
                start_line, start_col = line, col

        if start < len(text):
            self._append_sentence(
                sentences, text, start, len(text), start_line, start_col
            )
        return sentences

    def _append_sentence(
        self,
        sentences: list[Sentence],
        text: str,
        start: int,
        end: int,
        line: int,
        column: int,
    ) -> None:
        chunk = text[start:end]
        stripped = chunk.strip()
        if not stripped:
            return
        # leading whitespace never contains a newline: "\n" ends a sentence
        lead = len(chunk) - len(chunk.lstrip())
        sentences.append(
            Sentence(
                text=stripped,
                position=Position(
                    line=line,
                    column=column + lead,
                    offset=start + lead,
                    length=len(stripped),
                ),
                words=self.extract_words(text, start, end),
            )
        )

    def extract_words(
        self, text: str, start: int = 0, end: int | None = None
    ) -> list[Token]:
        """Word tokens inside ``text[start:end]`` with absolute positions."""
        stop = len(text) if end is None else min(end, len(text))
        tokens: list[Token] = []
        word_start = -1
        line, col = 1, 1
        word_line, word_col = 1, 1

        for i, ch in enumerate(text[:stop]):
            if i >= start:
                if is_word_char(ch):
                    if word_start < 0:
                        word_start = i
                        word_line, word_col = line, col
                elif word_start >= 0:
                    tokens.append(
                        _token(text, word_start, i, word_line, word_col)
                    )
                    word_start = -1
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1

        if word_start >= 0:
            tokens.append(_token(text, word_start, stop, word_line, word_col))
        return tokens

    def find_pattern(
        self, text: str, pattern: str, *, case_sensitive: bool = False
    ) -> list[Position]:
        """Non-overlapping literal occurrences of ``pattern``."""
        if not pattern:
            return []
        flags = 0 if case_sensitive else re.IGNORECASE
        positions: list[Position] = []
        for m in re.finditer(re.escape(pattern), text, flags):
            line, col = self.line_column(text, m.start())
            positions.append(
                Position(
                    line=line,
                    column=col,
                    offset=m.start(),
                    length=m.end() - m.start(),
                )
            )
        return positions

    @staticmethod
    def count_pattern(
        text: str, pattern: str, *, case_sensitive: bool = False
    ) -> int:
        if not pattern:
            return 0
        if case_sensitive:
            return text.count(pattern)
        flags = re.IGNORECASE
        return sum(1 for _ in re.finditer(re.escape(pattern), text, flags))

    @staticmethod
    def line_column(text: str, offset: int) -> tuple[int, int]:
        """1-based line and column of a character offset."""
        head = text[:offset]
        line = head.count("\n") + 1
        last_nl = head.rfind("\n")
        return line, offset - last_nl


def context_snippet(
    text: str,
    offset: int,
    length: int,
    window: int = CONTEXT_WINDOW_CHARS,
) -> str:
    """Surrounding text clamped to the input bounds."""
    start = max(0, offset - window)
    end = min(len(text), offset + length + window)
    return text[start:end].strip()


def truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def _token(
    text: str, start: int, end: int, line: int, column: int
) -> Token:
    word = text[start:end]
    return Token(
        text=word,
        lower=word.lower(),
        position=Position(
            line=line, column=column, offset=start, length=end - start
        ),
    )
