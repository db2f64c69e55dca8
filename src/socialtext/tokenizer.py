"""Tokenizer — scans buffer text into classified hashtag, mention, and hyperlink tokens."""

from __future__ import annotations

import bisect

from socialtext.patterns import PatternSet, payload_of
from socialtext.tokens import (
    ALL_CATEGORIES,
    PRECEDENCE,
    Category,
    Position,
    Span,
    Token,
)

_DEFAULT_PATTERNS = PatternSet()


class Tokenizer:
    """Match every enabled category's pattern against a text buffer."""

    def __init__(self, text: str, patterns: PatternSet | None = None) -> None:
        self._text = text
        self._patterns = patterns if patterns is not None else _DEFAULT_PATTERNS
        self._line_starts = [0]
        for idx, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(idx + 1)

    def scan(self, enabled: Category = ALL_CATEGORIES) -> list[Token]:
        """Return the tokens of all enabled categories in buffer order.

        Categories are evaluated in precedence order; within a category
        matches are leftmost-first and never overlap.
        """
        tokens: list[Token] = []
        for category in PRECEDENCE:
            if category in enabled:
                tokens.extend(self._scan_category(category))
        # Stable: ties on start keep precedence order.
        tokens.sort(key=lambda t: t.start)
        return tokens

    def _scan_category(self, category: Category) -> list[Token]:
        pattern = self._patterns.classify(category)
        tokens = []
        for match in pattern.finditer(self._text):
            start, end = match.span()
            if start == end:
                continue
            raw = match.group(0)
            tokens.append(Token(category, payload_of(category, match), raw, self._span(start, end)))
        return tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _position(self, offset: int) -> Position:
        line_idx = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line_idx + 1, offset - self._line_starts[line_idx] + 1, offset)

    def _span(self, start: int, end: int) -> Span:
        return Span(self._position(start), self._position(end))


def scan(
    text: str,
    enabled: Category = ALL_CATEGORIES,
    patterns: PatternSet | None = None,
) -> list[Token]:
    """Convenience function: scan text and return the token list."""
    return Tokenizer(text, patterns).scan(enabled)


def extract(
    text: str,
    category: Category,
    enabled: Category = ALL_CATEGORIES,
    patterns: PatternSet | None = None,
) -> list[str]:
    """Return the payloads of every category token in text, or [] if disabled."""
    if category not in enabled:
        return []
    return [t.payload for t in Tokenizer(text, patterns).scan(category)]
