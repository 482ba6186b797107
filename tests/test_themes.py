"""Tests for the theme registry and glyph lookup."""

from __future__ import annotations

import pytest

from genesis_trace.exceptions import ConfigError
from genesis_trace.models import LogLevel
from genesis_trace.themes import (
    DEFAULT_THEME,
    DRACULA_THEME,
    Theme,
    ThemeColors,
    available_themes,
    get_theme,
    register_theme,
)


def test_builtin_themes_are_registered_case_insensitively() -> None:
    assert {"default", "dracula", "neon", "ocean", "minimal"} <= set(available_themes())
    assert get_theme("Dracula") is DRACULA_THEME


def test_unknown_theme_raises_config_error() -> None:
    with pytest.raises(ConfigError, match="Unknown theme"):
        get_theme("sepia")


def test_level_colors_and_symbols() -> None:
    assert DEFAULT_THEME.get(LogLevel.ERROR) == DEFAULT_THEME.colors.error
    assert DEFAULT_THEME.symbol(LogLevel.SUCCESS) == "✓"
    assert get_theme("minimal").symbol(LogLevel.WARNING) == "!"


def test_glyphs_fall_back_to_theme_default_style() -> None:
    assert DEFAULT_THEME.glyphs("double").top_left == "╔"
    assert DRACULA_THEME.box.top_left == "╭"
    assert DRACULA_THEME.glyphs("missing").top_left == "╭"
    assert get_theme("minimal").box.vertical == "|"


def test_register_custom_theme() -> None:
    custom = Theme(
        name="Sunrise",
        colors=ThemeColors(**DEFAULT_THEME.colors.model_dump()),
        box_style="bold",
    )
    register_theme(custom)
    assert get_theme("sunrise") is custom
    assert custom.box.horizontal == "━"


def test_box_styles_cannot_be_mutated_through_a_shared_theme() -> None:
    theme = get_theme("default")
    custom = Theme(
        name="Boxy",
        colors=ThemeColors(**DEFAULT_THEME.colors.model_dump()),
        box_styles={"single": theme.glyphs("double")},
    )
    for candidate in (theme, custom):
        with pytest.raises(TypeError):
            candidate.box_styles["single"] = candidate.glyphs("ascii")  # type: ignore[index]
    assert theme.glyphs("single").horizontal == "─"
    assert custom.glyphs("single").horizontal == "═"
    assert custom.model_dump()["box_styles"]["single"]["horizontal"] == "═"
