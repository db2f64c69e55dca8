"""Tests for TOML config file loading and resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from socialtext.colors import DEFAULT_COLOR
from socialtext.config import SocialConfig, discover_config, load_config, resolve_config
from socialtext.errors import ColorAttributeNotFoundError, ConfigError, PatternError
from socialtext.tokens import ALL_CATEGORIES, Category


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("debug = true\n")
        assert load_config(cfg, tmp_path) == {"debug": True}

    def test_auto_discover_socialtext_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "socialtext.toml"
        cfg.write_text('[hashtag]\ncolor = "#112233"\n')
        assert load_config(None, tmp_path)["hashtag"] == {"color": "#112233"}


class TestResolveConfig:
    def test_defaults(self) -> None:
        config = resolve_config({})
        assert config.enabled == ALL_CATEGORIES
        assert config.colors == {c: DEFAULT_COLOR for c in config.colors}
        assert set(config.colors) == {Category.HASHTAG, Category.MENTION, Category.HYPERLINK}
        assert config.patterns == {}
        assert config.debug is False

    def test_accent_is_default_color(self) -> None:
        config = resolve_config({"theme": {"accent": "#00ff00"}})
        assert config.colors[Category.MENTION] == 0xFF00FF00

    def test_theme_reference(self) -> None:
        config = resolve_config(
            {"theme": {"link": "#0000ff"}, "hyperlink": {"color": "?link"}}
        )
        assert config.colors[Category.HYPERLINK] == 0xFF0000FF
        assert config.theme == {"link": 0xFF0000FF}

    def test_missing_theme_reference(self) -> None:
        with pytest.raises(ColorAttributeNotFoundError):
            resolve_config({"hashtag": {"color": "?nope"}})

    def test_disable_category(self) -> None:
        config = resolve_config({"mention": {"enabled": False}})
        assert Category.MENTION not in config.enabled
        assert Category.HASHTAG in config.enabled

    def test_pattern_override(self) -> None:
        config = resolve_config({"hashtag": {"pattern": r"#(\d+)"}})
        assert config.patterns == {Category.HASHTAG: r"#(\d+)"}

    def test_invalid_pattern(self) -> None:
        with pytest.raises(PatternError):
            resolve_config({"hashtag": {"pattern": "#("}})

    def test_invalid_color(self) -> None:
        with pytest.raises(ConfigError, match="hashtag.color"):
            resolve_config({"hashtag": {"color": "blue"}})

    def test_invalid_enabled(self) -> None:
        with pytest.raises(ConfigError):
            resolve_config({"hashtag": {"enabled": "yes"}})

    def test_invalid_section(self) -> None:
        with pytest.raises(ConfigError):
            resolve_config({"mention": "on"})

    def test_invalid_debug(self) -> None:
        with pytest.raises(ConfigError):
            resolve_config({"debug": 1})


class TestDiscoverConfig:
    def test_discover(self, tmp_path: Path) -> None:
        (tmp_path / "socialtext.toml").write_text(
            'debug = true\n[hyperlink]\nenabled = false\ncolor = "#abcdef"\n'
        )
        config = discover_config(tmp_path)
        assert isinstance(config, SocialConfig)
        assert config.debug is True
        assert Category.HYPERLINK not in config.enabled
        assert config.colors[Category.HYPERLINK] == 0xFFABCDEF

    def test_discover_missing(self, tmp_path: Path) -> None:
        assert discover_config(tmp_path) == resolve_config({})

    def test_error_names_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text("debug = 3\n")
        with pytest.raises(ConfigError) as exc_info:
            discover_config(tmp_path, cfg)
        assert str(cfg) in str(exc_info.value)
