"""In-memory styled text buffer with change watchers."""

from __future__ import annotations

from typing import Protocol

from socialtext.annotate import Annotation


class TextWatcher(Protocol):
    def before_text_changed(self, text: str, start: int, count: int, after: int) -> None: ...

    def on_text_changed(self, text: str, start: int, before: int, count: int) -> None: ...


class StyledBuffer:
    """Mutable text carrying annotation ranges.

    Every edit is a replacement of ``[start, end)`` by new text. Watchers see
    the text before the edit, then the text after it. Annotation ranges are
    exclusive at both ends: text inserted at either edge stays outside, and a
    range that shrinks to nothing is dropped.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._ranges: dict[Annotation, tuple[int, int]] = {}
        self._watchers: list[TextWatcher] = []

    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    # ------------------------------------------------------------------
    # Watchers
    # ------------------------------------------------------------------

    def add_watcher(self, watcher: TextWatcher) -> None:
        if watcher not in self._watchers:
            self._watchers.append(watcher)

    def remove_watcher(self, watcher: TextWatcher) -> None:
        if watcher in self._watchers:
            self._watchers.remove(watcher)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def replace(self, start: int, end: int, text: str) -> None:
        """Replace the characters in [start, end) with text."""
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"range [{start}, {end}) outside buffer of length {len(self._text)}")
        removed = end - start
        inserted = len(text)
        if removed == 0 and inserted == 0:
            return

        for watcher in list(self._watchers):
            watcher.before_text_changed(self._text, start, removed, inserted)

        self._text = self._text[:start] + text + self._text[end:]
        self._shift(start, end, inserted)

        for watcher in list(self._watchers):
            watcher.on_text_changed(self._text, start, removed, inserted)

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, offset, text)

    def delete(self, start: int, end: int) -> None:
        self.replace(start, end, "")

    def append(self, text: str) -> None:
        self.replace(len(self._text), len(self._text), text)

    def set_text(self, text: str) -> None:
        self.replace(0, len(self._text), text)

    def type(self, text: str, offset: int | None = None) -> None:
        """Insert text one character at a time, as a keyboard would."""
        pos = len(self._text) if offset is None else offset
        for ch in text:
            self.insert(pos, ch)
            pos += 1

    def backspace(self, offset: int | None = None) -> None:
        """Delete the character before offset (default: end of buffer)."""
        pos = len(self._text) if offset is None else offset
        if pos > 0:
            self.delete(pos - 1, pos)

    def _shift(self, start: int, end: int, inserted: int) -> None:
        delta = inserted - (end - start)
        shifted: dict[Annotation, tuple[int, int]] = {}
        for annotation, (a_start, a_end) in self._ranges.items():
            if a_end <= start:
                new_start, new_end = a_start, a_end
            elif a_start >= end:
                new_start, new_end = a_start + delta, a_end + delta
            else:
                new_start = a_start if a_start < start else start + inserted
                new_end = a_end + delta if a_end > end else start
            if new_start < new_end:
                shifted[annotation] = (new_start, new_end)
        self._ranges = shifted

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def annotations(self) -> list[tuple[Annotation, int, int]]:
        return [(a, start, end) for a, (start, end) in self._ranges.items()]

    def clear_annotations(self) -> None:
        self._ranges.clear()

    def add_annotation(self, annotation: Annotation, start: int, end: int) -> None:
        if not 0 <= start < end <= len(self._text):
            raise IndexError(f"annotation range [{start}, {end}) outside buffer")
        self._ranges[annotation] = (start, end)

    def annotation_range(self, annotation: Annotation) -> tuple[int, int] | None:
        return self._ranges.get(annotation)

    def annotation_at(self, offset: int) -> Annotation | None:
        """Return the topmost clickable annotation covering offset, if any."""
        hit = None
        for annotation, (start, end) in self._ranges.items():
            if start <= offset < end and annotation.clickable:
                hit = annotation
        return hit

    def click(self, offset: int) -> str | None:
        """Activate the clickable annotation at offset; returns its payload."""
        annotation = self.annotation_at(offset)
        if annotation is None:
            return None
        return annotation.click(self)
