"""Test error messages and context formatting."""

import pytest

from socialtext.errors import (
    ColorAttributeNotFoundError,
    ConfigError,
    NotAnnotatableError,
    PatternError,
    UnsupportedAvatarTypeError,
)
from socialtext.patterns import PatternSet
from socialtext.tokens import Category


class TestPatternError:
    def test_position(self):
        with pytest.raises(PatternError) as exc_info:
            PatternSet().set_pattern(Category.HASHTAG, "#(abc")
        err = exc_info.value
        assert err.category == Category.HASHTAG
        assert err.regex == "#(abc"
        assert err.position.line == 1
        assert err.position.offset == 1
        assert err.position.column == 2

    def test_format_contains_regex_and_caret(self):
        with pytest.raises(PatternError) as exc_info:
            PatternSet().set_pattern(Category.MENTION, "@(abc")
        formatted = exc_info.value.format()
        assert formatted.startswith("error:")
        assert "@(abc" in formatted
        assert "mention pattern:1:2" in formatted
        assert formatted.rstrip().endswith("^")

    def test_str_is_formatted(self):
        with pytest.raises(PatternError) as exc_info:
            PatternSet().set_pattern(Category.HASHTAG, "[")
        assert str(exc_info.value) == exc_info.value.format()

    def test_without_position(self):
        err = PatternError("bad", Category.HYPERLINK, "x")
        assert "hyperlink pattern" in err.format()


class TestOtherErrors:
    def test_not_annotatable(self):
        err = NotAnnotatableError("text is not annotatable", "plain")
        assert err.surface == "plain"
        assert "str" in str(err)

    def test_color_attribute(self):
        err = ColorAttributeNotFoundError("accent")
        assert err.attr == "accent"
        assert "accent" in str(err)

    def test_avatar(self):
        err = UnsupportedAvatarTypeError(1.5)
        assert err.value == 1.5
        assert "float" in str(err)

    def test_config(self):
        err = ConfigError("debug must be true or false", "/tmp/socialtext.toml")
        assert err.format() == "error: debug must be true or false\n  --> /tmp/socialtext.toml"
