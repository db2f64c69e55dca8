"""Annotator — rebuilds the colour and click annotations of a styled surface."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from socialtext.errors import NotAnnotatableError
from socialtext.patterns import payload_of
from socialtext.tokens import ALL_CATEGORIES, PRECEDENCE, Category, Token

ClickListener = Callable[[Category, str], None]


@dataclass(frozen=True, slots=True)
class CategoryStyle:
    """Colour, optional click listener, and the pattern that found the tokens."""

    color: int
    listener: ClickListener | None = None
    pattern: re.Pattern[str] | None = None


@dataclass(eq=False, slots=True)
class Annotation:
    """A colour decoration, clickable when it carries a listener.

    The annotated range is owned by the surface and shifts with edits, so it
    is looked up again on every click.
    """

    category: Category
    color: int
    listener: ClickListener | None = None
    pattern: re.Pattern[str] | None = None

    @property
    def clickable(self) -> bool:
        return self.listener is not None

    def click(self, surface: MutableStyledSequence) -> str | None:
        """Invoke the listener with the payload of the text under this annotation.

        The text is matched against the pattern again so the payload is the
        same one extraction reports. Without a pattern, or when the text no
        longer matches, one leading symbol is dropped. Returns the payload
        passed to the listener, or None when nothing fired.
        """
        if self.listener is None:
            return None
        rng = surface.annotation_range(self)
        if rng is None:
            return None
        start, end = rng
        text = surface.text[start:end]
        match = self.pattern.fullmatch(text) if self.pattern is not None else None
        if match is not None:
            payload = payload_of(self.category, match)
        else:
            payload = text[1:] if self.category.symbols else text
        if not payload:
            return None
        self.listener(self.category, payload)
        return payload


@runtime_checkable
class MutableStyledSequence(Protocol):
    """Text that can carry ranged annotations."""

    @property
    def text(self) -> str: ...

    def annotations(self) -> list[tuple[Annotation, int, int]]: ...

    def clear_annotations(self) -> None: ...

    def add_annotation(self, annotation: Annotation, start: int, end: int) -> None: ...

    def annotation_range(self, annotation: Annotation) -> tuple[int, int] | None: ...


def colorize(
    surface: object,
    tokens: Iterable[Token],
    styles: Mapping[Category, CategoryStyle],
    enabled: Category = ALL_CATEGORIES,
) -> list[Annotation]:
    """Replace every annotation on surface with one per enabled token.

    All annotations are built before the surface is touched, so a failure
    leaves the previous annotations in place.
    """
    if not isinstance(surface, MutableStyledSequence):
        raise NotAnnotatableError(
            "text is not annotatable; attach a StyledBuffer or another MutableStyledSequence",
            surface,
        )

    tokens = list(tokens)
    placed: list[tuple[Annotation, int, int]] = []
    for category in PRECEDENCE:
        if category not in enabled:
            continue
        style = styles[category]
        for token in tokens:
            if token.category == category:
                annotation = Annotation(category, style.color, style.listener, style.pattern)
                placed.append((annotation, token.start, token.end))

    surface.clear_annotations()
    for annotation, start, end in placed:
        surface.add_annotation(annotation, start, end)
    return [annotation for annotation, _, _ in placed]


def snapshot(surface: MutableStyledSequence) -> list[tuple[Category, int, int, int, bool]]:
    """Return the surface's annotations as comparable (category, start, end, color, clickable) rows."""
    return [
        (a.category, start, end, a.color, a.clickable)
        for a, start, end in surface.annotations()
    ]
