"""Error types with formatted context."""

from __future__ import annotations

import re
from typing import Any

from socialtext.tokens import Category, Position


class PatternError(Exception):
    """Raised when a replacement pattern does not compile."""

    def __init__(
        self,
        message: str,
        category: Category,
        regex: str,
        position: Position | None = None,
    ) -> None:
        self.message = message
        self.category = category
        self.regex = regex
        self.position = position
        super().__init__(self.format())

    @classmethod
    def from_re_error(cls, exc: re.error, category: Category, regex: str) -> PatternError:
        position = None
        if exc.pos is not None:
            line = exc.lineno or 1
            column = exc.colno or exc.pos + 1
            position = Position(line, column, exc.pos)
        return cls(exc.msg, category, regex, position)

    def format(self) -> str:
        location = f"{self.category.label} pattern"
        if self.position is None:
            return f"error: {self.message}\n  --> {location}\n  | {self.regex}"

        lines = self.regex.splitlines() or [""]
        line_idx = self.position.line - 1
        col = self.position.column
        source_line = lines[line_idx] if 0 <= line_idx < len(lines) else ""

        pad = " " * (col - 1)
        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {location}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class NotAnnotatableError(Exception):
    """Raised when the host surface cannot hold style annotations."""

    def __init__(self, message: str, surface: Any) -> None:
        self.message = message
        self.surface = surface
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}\n  --> surface of type {type(self.surface).__name__}"


class ColorAttributeNotFoundError(Exception):
    """Raised when a theme colour attribute resolves to nothing."""

    def __init__(self, attr: str) -> None:
        self.attr = attr
        super().__init__(f"error: color attribute '{attr}' not found in current theme")


class UnsupportedAvatarTypeError(Exception):
    """Raised for a suggestion avatar that is neither a resource id nor a URL."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"error: avatar can only be a string URL or an int resource id, "
            f"got {type(value).__name__}"
        )


class ConfigError(Exception):
    """Raised on an invalid value in a socialtext.toml file."""

    def __init__(self, message: str, path: str = "socialtext.toml") -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}\n  --> {self.path}"
