"""socialtext.toml discovery, loading, and validation."""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from socialtext.colors import DEFAULT_COLOR, parse_color, resolve_color_attr
from socialtext.errors import ConfigError, PatternError
from socialtext.tokens import ALL_CATEGORIES, PRECEDENCE, Category

CONFIG_NAME = "socialtext.toml"


@dataclass(frozen=True, slots=True)
class SocialConfig:
    """Resolved view configuration."""

    enabled: Category = ALL_CATEGORIES
    colors: dict[Category, int] = field(default_factory=dict)
    patterns: dict[Category, str] = field(default_factory=dict)
    theme: dict[str, int] = field(default_factory=dict)
    debug: bool = False


def load_config(config_path: Path | None, directory: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else directory / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_config(raw: dict[str, Any], path: str = CONFIG_NAME) -> SocialConfig:
    """Validate a loaded config table and resolve its colours.

    Colours are ``#RRGGBB``/``#AARRGGBB`` literals or ``?name`` references
    into the ``[theme]`` table. Unset colours fall back to the theme's
    ``accent``, then to DEFAULT_COLOR.
    """
    theme: dict[str, int] = {}
    cfg_theme = raw.get("theme", {})
    if not isinstance(cfg_theme, dict):
        raise ConfigError("[theme] must be a table", path)
    for name, value in cfg_theme.items():
        theme[str(name)] = _color(value, f"theme.{name}", path)

    default_color = theme.get("accent") or DEFAULT_COLOR

    enabled = ALL_CATEGORIES
    colors: dict[Category, int] = {}
    patterns: dict[Category, str] = {}
    for category in PRECEDENCE:
        section = raw.get(category.label, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{category.label}] must be a table", path)

        cfg_enabled = section.get("enabled", True)
        if not isinstance(cfg_enabled, bool):
            raise ConfigError(f"{category.label}.enabled must be true or false", path)
        if not cfg_enabled:
            enabled &= ~category

        cfg_color = section.get("color")
        if cfg_color is None:
            colors[category] = default_color
        elif isinstance(cfg_color, str) and cfg_color.startswith("?"):
            colors[category] = resolve_color_attr(theme, cfg_color[1:])
        else:
            colors[category] = _color(cfg_color, f"{category.label}.color", path)

        cfg_pattern = section.get("pattern")
        if cfg_pattern is not None:
            if not isinstance(cfg_pattern, str):
                raise ConfigError(f"{category.label}.pattern must be a string", path)
            try:
                re.compile(cfg_pattern)
            except re.error as exc:
                raise PatternError.from_re_error(exc, category, cfg_pattern) from None
            patterns[category] = cfg_pattern

    cfg_debug = raw.get("debug", False)
    if not isinstance(cfg_debug, bool):
        raise ConfigError("debug must be true or false", path)

    return SocialConfig(
        enabled=enabled,
        colors=colors,
        patterns=patterns,
        theme=theme,
        debug=cfg_debug,
    )


def discover_config(directory: Path, config_path: Path | None = None) -> SocialConfig:
    """Load and resolve the config next to directory (or at config_path)."""
    path = config_path if config_path is not None else directory / CONFIG_NAME
    return resolve_config(load_config(config_path, directory), str(path))


def _color(value: Any, key: str, path: str) -> int:
    if not isinstance(value, (str, int)):
        raise ConfigError(f"{key} must be a color string or integer", path)
    try:
        return parse_color(value)
    except ValueError as exc:
        raise ConfigError(f"{key}: {exc}", path) from None
