"""Incremental hashtag, mention, and hyperlink highlighting for editable text."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from socialtext.patterns import PatternSet
    from socialtext.tokens import Category, Token

__version__ = "0.1.0"


def scan(
    text: str,
    enabled: Category | None = None,
    patterns: PatternSet | None = None,
) -> list[Token]:
    """Classify every hashtag, mention, and hyperlink in text."""
    from socialtext.tokenizer import Tokenizer
    from socialtext.tokens import ALL_CATEGORIES

    return Tokenizer(text, patterns).scan(ALL_CATEGORIES if enabled is None else enabled)
