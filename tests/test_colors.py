"""Test colour parsing and theme attribute lookup."""

import pytest

from socialtext.colors import format_color, parse_color, resolve_color_attr
from socialtext.errors import ColorAttributeNotFoundError


class TestParseColor:
    def test_rrggbb_is_opaque(self):
        assert parse_color("#1DA1F2") == 0xFF1DA1F2

    def test_aarrggbb(self):
        assert parse_color("#801DA1F2") == 0x801DA1F2

    def test_short_form(self):
        assert parse_color("#f00") == 0xFFFF0000

    def test_int_passthrough(self):
        assert parse_color(0xFF000000) == 0xFF000000

    @pytest.mark.parametrize("value", ["1DA1F2", "#12345", "#zzzzzz", -1, 0x1FFFFFFFF, True])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_color(value)


class TestFormatColor:
    def test_format(self):
        assert format_color(0xFF1DA1F2) == "#FF1DA1F2"


class TestResolveAttr:
    def test_found(self):
        assert resolve_color_attr({"accent": 0xFF00FF00}, "accent") == 0xFF00FF00

    def test_missing(self):
        with pytest.raises(ColorAttributeNotFoundError):
            resolve_color_attr({}, "accent")

    def test_zero_counts_as_missing(self):
        with pytest.raises(ColorAttributeNotFoundError):
            resolve_color_attr({"accent": 0}, "accent")
