"""Token categories, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag


class Category(Flag):
    HASHTAG = 1  # #name or ＃name
    MENTION = 2  # @name
    HYPERLINK = 4  # web URL

    @property
    def symbols(self) -> str:
        """Trigger characters that open a token of this category."""
        return _SYMBOLS.get(self, "")

    @property
    def label(self) -> str:
        return self.name.lower() if self.name else "none"


_SYMBOLS = {
    Category.HASHTAG: "#＃",
    Category.MENTION: "@",
}

# Evaluation (and painting) order; later categories win where ranges overlap.
PRECEDENCE: tuple[Category, ...] = (Category.HASHTAG, Category.MENTION, Category.HYPERLINK)

ALL_CATEGORIES = Category.HASHTAG | Category.MENTION | Category.HYPERLINK
NO_CATEGORIES = Category(0)


@dataclass(frozen=True, slots=True)
class Position:
    """Buffer position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Buffer range from start to end position (end exclusive)."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A classified match with its extracted payload and original text."""

    category: Category
    payload: str
    raw: str
    span: Span

    @property
    def start(self) -> int:
        return self.span.start.offset

    @property
    def end(self) -> int:
        return self.span.end.offset


def is_letter_or_digit(ch: str) -> bool:
    """Return True if ch is a letter or a digit."""
    return ch.isalpha() or ch.isdigit()


def category_for_symbol(ch: str) -> Category | None:
    """Return the category whose trigger symbol is ch, if any."""
    for category, symbols in _SYMBOLS.items():
        if ch and ch in symbols:
            return category
    return None
