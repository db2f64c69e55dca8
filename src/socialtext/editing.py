"""Edit tracking — follows the hashtag or mention being typed and reports it as it grows."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum, auto

from socialtext.tokens import Category, category_for_symbol, is_letter_or_digit

logger = logging.getLogger(__name__)

PartialTokenListener = Callable[[Category, str], None]

# Categories typed behind a trigger symbol.
TRACKED: tuple[Category, ...] = (Category.HASHTAG, Category.MENTION)


class EditState(Enum):
    IDLE = auto()
    EDITING = auto()


class EditTracker:
    """Per-category Idle/Editing state driven by before/after edit events.

    Only the character next to the edit is inspected; the buffer is never
    rescanned here.
    """

    def __init__(self, debug: bool = False) -> None:
        self.debug = debug
        self._states: dict[Category, EditState] = {c: EditState.IDLE for c in TRACKED}
        self._listeners: dict[Category, PartialTokenListener | None] = {c: None for c in TRACKED}

    def state(self, category: Category) -> EditState:
        return self._states.get(category, EditState.IDLE)

    def is_editing(self, category: Category) -> bool:
        return self.state(category) is EditState.EDITING

    def set_listener(self, category: Category, listener: PartialTokenListener | None) -> None:
        if category not in self._listeners:
            raise ValueError(f"partial tokens are not tracked for {category!r}")
        self._listeners[category] = listener

    def listener(self, category: Category) -> PartialTokenListener | None:
        return self._listeners.get(category)

    def reset(self) -> None:
        for category in TRACKED:
            self._states[category] = EditState.IDLE

    # ------------------------------------------------------------------
    # Edit events
    # ------------------------------------------------------------------

    def before_change(self, text: str, start: int, removed: int) -> None:
        """Handle the text as it is before removed characters at start go away."""
        if self.debug:
            logger.debug("before change text=%r start=%d removed=%d", text, start, removed)
        # Only deletions matter here: the character left in front of the cursor.
        if removed <= 0 or start <= 0:
            return
        boundary = start - 1
        self._on_boundary(text, boundary, text[_token_start(text, boundary) : start])

    def after_change(self, text: str, start: int, inserted: int) -> None:
        """Handle the text as it is after inserted characters were placed at start."""
        if self.debug:
            logger.debug("after change text=%r start=%d inserted=%d", text, start, inserted)
        if not text or inserted <= 0:
            return
        boundary = start + inserted - 1
        if boundary >= len(text):
            return
        self._on_boundary(text, boundary, text[_token_start(text, boundary) : boundary + 1])

    def _on_boundary(self, text: str, boundary: int, partial: str) -> None:
        ch = text[boundary]
        if self.debug:
            logger.debug("boundary char %r at %d", ch, boundary)

        trigger = category_for_symbol(ch)
        if trigger is not None:
            for category in TRACKED:
                self._transition(category, EditState.EDITING if category == trigger else EditState.IDLE)
            return

        if not is_letter_or_digit(ch):
            for category in TRACKED:
                self._transition(category, EditState.IDLE)
            return

        for category in TRACKED:
            listener = self._listeners[category]
            if self.is_editing(category) and listener is not None:
                if self.debug:
                    logger.debug("partial %s %r", category.label, partial)
                listener(category, partial)

    def _transition(self, category: Category, state: EditState) -> None:
        if self.debug and self._states[category] is not state:
            logger.debug("%s: %s -> %s", category.label, self._states[category].name, state.name)
        self._states[category] = state


def _token_start(text: str, boundary: int) -> int:
    """Index of the first letter/digit in the run that ends at boundary."""
    idx = boundary
    while idx >= 0 and is_letter_or_digit(text[idx]):
        idx -= 1
    return idx + 1
