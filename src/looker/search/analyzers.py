"""Analyzer utilities for the tf-idf search stack.

This module mirrors Whoosh's composable tokenizer/filter design without
pulling in heavy dependencies. Character filters run over the raw text,
the tokenizer segments the cleaned text along word boundaries, and token
filters prune the stream. The same default analyzer is used for documents
and queries so both sides share one vocabulary.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol
import unicodedata


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int


class CharFilter(Protocol):
    """Protocol implemented by filters that rewrite text before tokenizing."""

    def __call__(self, text: str) -> str:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


# Scripts written without spaces segment one character per word (UAX #29
# treats each ideograph and hiragana character as its own word).
_SINGLE_CHAR_SCRIPTS = (
    "\u3040-\u309f"  # Hiragana
    "\u3400-\u4dbf"  # CJK Extension A
    "\u4e00-\u9fff"  # CJK Unified Ideographs
    "\uf900-\ufaff"  # CJK Compatibility Ideographs
    "\U00020000-\U0002fa1f"  # CJK Extensions B-F + supplement
)

WORD_BOUNDARY_PATTERN = rf"[{_SINGLE_CHAR_SCRIPTS}]|[^\s{_SINGLE_CHAR_SCRIPTS}]+"


class LowercaseCharFilter:
    """Lowercase the whole text before tokenizing."""

    def __call__(self, text: str) -> str:
        return text.lower()


class UnwantedCharacterFilter:
    """Drop every character that is neither alphanumeric nor whitespace.

    Whitespace survives so it can still separate words; the result is trimmed.
    Combining marks (Indic vowel signs, viramas, accents in decomposed form)
    are kept when they attach to a kept character, so words in those scripts
    stay intact.
    """

    def __call__(self, text: str) -> str:
        kept: list[str] = []
        for ch in text:
            if ch.isalnum() or ch.isspace():
                kept.append(ch)
            elif kept and not kept[-1].isspace() and unicodedata.category(ch).startswith("M"):
                kept.append(ch)
        return "".join(kept).strip()


class RegexTokenizer:
    """Regex-based tokenizer that yields word-boundary segments."""

    def __init__(self, pattern: str = WORD_BOUNDARY_PATTERN, flags: int = re.UNICODE | re.MULTILINE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class WhitespaceFilter:
    """Removes tokens that are empty or pure whitespace."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text and not token.text.isspace():
                yield token


DEFAULT_STOPWORDS = [
    "a",
    "about",
    "above",
    "after",
    "again",
    "against",
    "all",
    "am",
    "an",
    "and",
    "any",
    "are",
    "as",
    "at",
    "be",
    "because",
    "been",
    "before",
    "being",
    "below",
    "between",
    "both",
    "but",
    "by",
    "can",
    "could",
    "did",
    "do",
    "does",
    "doing",
    "down",
    "during",
    "each",
    "few",
    "for",
    "from",
    "further",
    "had",
    "has",
    "have",
    "having",
    "he",
    "her",
    "here",
    "hers",
    "herself",
    "him",
    "himself",
    "his",
    "how",
    "i",
    "if",
    "in",
    "into",
    "is",
    "it",
    "its",
    "itself",
    "just",
    "me",
    "more",
    "most",
    "my",
    "myself",
    "no",
    "nor",
    "not",
    "now",
    "of",
    "off",
    "on",
    "once",
    "only",
    "or",
    "other",
    "our",
    "ours",
    "ourselves",
    "out",
    "over",
    "own",
    "same",
    "she",
    "should",
    "so",
    "some",
    "such",
    "than",
    "that",
    "the",
    "their",
    "theirs",
    "them",
    "themselves",
    "then",
    "there",
    "these",
    "they",
    "this",
    "those",
    "through",
    "to",
    "too",
    "under",
    "until",
    "up",
    "very",
    "was",
    "we",
    "were",
    "what",
    "when",
    "where",
    "which",
    "while",
    "who",
    "whom",
    "why",
    "will",
    "with",
    "would",
    "you",
    "your",
    "yours",
    "yourself",
    "yourselves",
]


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.lower() not in self.stopwords:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (char filters + tokenizer + token filters)."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        filters: Sequence[TokenFilter] | None = None,
        *,
        char_filters: Sequence[CharFilter] | None = None,
    ) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])
        self.char_filters = list(char_filters or [])

    def __call__(self, text: str) -> list[Token]:
        for char_filter in self.char_filters:
            text = char_filter(text)
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens


class StandardAnalyzer:
    """Default analyzer: lowercase, strip punctuation, segment, drop stop words.

    Stemming is intentionally absent; tokens are indexed verbatim.
    """

    def __init__(self, *, stopwords: Sequence[str] | None = None) -> None:
        self.pipeline = AnalyzerPipeline(
            RegexTokenizer(),
            [WhitespaceFilter(), StopFilter(stopwords)],
            char_filters=[LowercaseCharFilter(), UnwantedCharacterFilter()],
        )

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return self.pipeline(text)


_DEFAULT_ANALYZER = StandardAnalyzer()


def normalize(text: str) -> list[str]:
    """Turn raw text into the ordered list of normalized terms."""

    return [token.text for token in _DEFAULT_ANALYZER(text)]
