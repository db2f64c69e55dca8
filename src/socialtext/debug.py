"""Debug toggle and human-readable token/annotation dumps."""

from __future__ import annotations

import sys
from typing import TextIO

from socialtext.annotate import MutableStyledSequence
from socialtext.colors import format_color
from socialtext.tokens import Token

_DEBUG = False


def set_debug(enabled: bool) -> None:
    """Turn edit-event tracing on or off for views created afterwards."""
    global _DEBUG
    _DEBUG = enabled


def is_debug() -> bool:
    return _DEBUG


def format_tokens(tokens: list[Token]) -> str:
    """Render tokens one per line as ``category start-end payload (raw)``."""
    lines = []
    for tok in tokens:
        pos = tok.span.start
        lines.append(
            f"  {tok.category.label:<9} {tok.start}-{tok.end} "
            f"@{pos.line}:{pos.column} {tok.payload!r} ({tok.raw!r})"
        )
    return "\n".join(lines)


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print a token listing to *file*."""
    file.write(f"Tokens ({len(tokens)})\n")
    if tokens:
        file.write(format_tokens(tokens) + "\n")


def dump_annotations(surface: MutableStyledSequence, *, file: TextIO = sys.stderr) -> None:
    """Print the annotations currently on *surface* to *file*."""
    entries = surface.annotations()
    file.write(f"Annotations ({len(entries)})\n")
    text = surface.text
    for annotation, start, end in entries:
        kind = "Clickable" if annotation.clickable else "Color"
        file.write(
            f"  {kind} {annotation.category.label} {start}-{end} "
            f"{format_color(annotation.color)} {text[start:end]!r}\n"
        )
