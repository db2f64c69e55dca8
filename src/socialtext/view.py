"""SocialView — binds the tokenizer, edit tracker, and annotator to one text surface."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from socialtext import debug as _debug
from socialtext.annotate import CategoryStyle, ClickListener, colorize
from socialtext.colors import DEFAULT_COLOR, Theme, resolve_color_attr
from socialtext.editing import EditTracker, PartialTokenListener
from socialtext.patterns import PatternSet
from socialtext.tokenizer import Tokenizer
from socialtext.tokens import ALL_CATEGORIES, PRECEDENCE, Category, Token

if TYPE_CHECKING:
    from socialtext.annotate import Annotation
    from socialtext.buffer import StyledBuffer
    from socialtext.config import SocialConfig

logger = logging.getLogger(__name__)


class SocialView:
    """Hashtag, mention, and hyperlink highlighting for a styled text surface.

    The view registers itself as a watcher of the surface; every edit updates
    the partial-token state and then recolours the whole text.
    """

    def __init__(
        self,
        surface: StyledBuffer,
        *,
        enabled: Category = ALL_CATEGORIES,
        color: int = DEFAULT_COLOR,
        colors: Mapping[Category, int] | None = None,
        patterns: PatternSet | None = None,
        debug: bool | None = None,
    ) -> None:
        self._surface = surface
        self._enabled = enabled
        self._colors: dict[Category, int] = {c: color for c in PRECEDENCE}
        self._colors.update(colors or {})
        self._click_listeners: dict[Category, ClickListener | None] = {c: None for c in PRECEDENCE}
        self._patterns = patterns if patterns is not None else PatternSet()
        self._tracker = EditTracker()
        self.debug = _debug.is_debug() if debug is None else debug
        self._annotations: list[Annotation] = []
        # NotAnnotatableError must leave the surface without a watcher.
        self.colorize()
        surface.add_watcher(self)

    @classmethod
    def attach(cls, surface: StyledBuffer, **kwargs) -> SocialView:
        """Attach a view with default settings to surface."""
        return cls(surface, **kwargs)

    @classmethod
    def from_config(cls, surface: StyledBuffer, config: SocialConfig) -> SocialView:
        """Attach a view configured from a resolved socialtext.toml."""
        patterns = PatternSet(dict(config.patterns))
        return cls(
            surface,
            enabled=config.enabled,
            colors=config.colors,
            patterns=patterns,
            debug=config.debug,
        )

    def detach(self) -> None:
        """Stop following edits; annotations already applied are left alone."""
        self._surface.remove_watcher(self)

    @property
    def surface(self) -> StyledBuffer:
        return self._surface

    @property
    def patterns(self) -> PatternSet:
        return self._patterns

    @property
    def debug(self) -> bool:
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._debug = value
        self._tracker.debug = value

    # ------------------------------------------------------------------
    # Enabled categories
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> Category:
        return self._enabled

    @enabled.setter
    def enabled(self, value: Category) -> None:
        self._enabled = value
        self.colorize()

    def is_enabled(self, category: Category) -> bool:
        return category in self._enabled

    def set_enabled(self, category: Category, enabled: bool) -> None:
        if enabled:
            self._enabled |= category
        else:
            self._enabled &= ~category
        self.colorize()

    # ------------------------------------------------------------------
    # Colours and listeners
    # ------------------------------------------------------------------

    def color(self, category: Category) -> int:
        return self._colors[category]

    def set_color(self, category: Category, color: int) -> None:
        self._colors[category] = color
        self.colorize()

    def set_color_attr(self, category: Category, attr: str, theme: Theme) -> None:
        """Set the colour from a theme attribute; raises if the theme lacks it."""
        self.set_color(category, resolve_color_attr(theme, attr))

    def click_listener(self, category: Category) -> ClickListener | None:
        return self._click_listeners[category]

    def set_click_listener(self, category: Category, listener: ClickListener | None) -> None:
        self._click_listeners[category] = listener
        self.colorize()

    def partial_listener(self, category: Category) -> PartialTokenListener | None:
        return self._tracker.listener(category)

    def set_partial_listener(self, category: Category, listener: PartialTokenListener | None) -> None:
        # Only the next edit notification is affected; no recolouring needed.
        self._tracker.set_listener(category, listener)

    def is_editing(self, category: Category) -> bool:
        return self._tracker.is_editing(category)

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def set_pattern(self, category: Category, regex: str | re.Pattern[str]) -> None:
        """Replace a pattern for this view only; PatternError keeps the old one."""
        self._patterns.set_pattern(category, regex)
        self.colorize()

    def reset_pattern(self, category: Category) -> None:
        self._patterns.reset(category)
        self.colorize()

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def tokens(self) -> list[Token]:
        """Scan the current text for every enabled category."""
        return Tokenizer(self._surface.text, self._patterns).scan(self._enabled)

    def extract(self, category: Category) -> list[str]:
        if not self.is_enabled(category):
            return []
        return [t.payload for t in Tokenizer(self._surface.text, self._patterns).scan(category)]

    def hashtags(self) -> list[str]:
        return self.extract(Category.HASHTAG)

    def mentions(self) -> list[str]:
        return self.extract(Category.MENTION)

    def hyperlinks(self) -> list[str]:
        return self.extract(Category.HYPERLINK)

    # ------------------------------------------------------------------
    # Recompute
    # ------------------------------------------------------------------

    def styles(self) -> dict[Category, CategoryStyle]:
        return {
            c: CategoryStyle(self._colors[c], self._click_listeners[c], self._patterns.classify(c))
            for c in PRECEDENCE
        }

    def colorize(self) -> list[Annotation]:
        """Rescan the text and rebuild every annotation on the surface."""
        tokens = self.tokens()
        self._annotations = colorize(self._surface, tokens, self.styles(), self._enabled)
        if self._debug:
            logger.debug("colorized %d token(s)\n%s", len(tokens), _debug.format_tokens(tokens))
        return list(self._annotations)

    @property
    def annotations(self) -> list[Annotation]:
        """Annotations placed by the last recompute."""
        return list(self._annotations)

    # ------------------------------------------------------------------
    # Surface change notifications
    # ------------------------------------------------------------------

    def before_text_changed(self, text: str, start: int, count: int, after: int) -> None:
        self._tracker.before_change(text, start, count)

    def on_text_changed(self, text: str, start: int, before: int, count: int) -> None:
        self._tracker.after_change(text, start, count)
        self.colorize()
