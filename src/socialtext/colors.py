"""Colour literals and theme attribute resolution."""

from __future__ import annotations

from collections.abc import Mapping

from socialtext.errors import ColorAttributeNotFoundError

# Opaque holo blue, used when neither the config nor the theme names a colour.
DEFAULT_COLOR = 0xFF33B5E5

Theme = Mapping[str, int]


def parse_color(value: str | int) -> int:
    """Parse #RGB, #RRGGBB, #AARRGGBB or an int into an 0xAARRGGBB int.

    Six-digit and three-digit forms are made opaque.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid color: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"color out of range: {value:#x}")
        return value
    if not value.startswith("#"):
        raise ValueError(f"invalid color (expected #RRGGBB): {value!r}")
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) not in (6, 8):
        raise ValueError(f"invalid color (expected #RRGGBB or #AARRGGBB): {value!r}")
    try:
        parsed = int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid color digits: {value!r}") from None
    if len(digits) == 6:
        parsed |= 0xFF000000
    return parsed


def format_color(color: int) -> str:
    """Format an 0xAARRGGBB int as #AARRGGBB."""
    return f"#{color & 0xFFFFFFFF:08X}"


def resolve_color_attr(theme: Theme, attr: str) -> int:
    """Look up a colour attribute in theme.

    A missing attribute, or one that resolves to 0, raises
    ColorAttributeNotFoundError.
    """
    color = theme.get(attr, 0)
    if not color:
        raise ColorAttributeNotFoundError(attr)
    return color
