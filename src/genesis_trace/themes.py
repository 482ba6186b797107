"""Immutable palettes and the named theme registry."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .colors import CODES, hex_color
from .exceptions import ConfigError
from .models import LogLevel

BoxStyle = Literal["single", "double", "rounded", "bold", "ascii"]


class BoxGlyphs(BaseModel):
    """Box-drawing glyph set for one border style."""

    model_config = ConfigDict(frozen=True)

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    cross: str
    tee_left: str
    tee_right: str
    tee_top: str
    tee_bottom: str


SINGLE = BoxGlyphs(
    top_left="┌", top_right="┐", bottom_left="└", bottom_right="┘",
    horizontal="─", vertical="│", cross="┼",
    tee_left="├", tee_right="┤", tee_top="┬", tee_bottom="┴",
)
DOUBLE = BoxGlyphs(
    top_left="╔", top_right="╗", bottom_left="╚", bottom_right="╝",
    horizontal="═", vertical="║", cross="╬",
    tee_left="╠", tee_right="╣", tee_top="╦", tee_bottom="╩",
)
ROUNDED = SINGLE.model_copy(
    update={"top_left": "╭", "top_right": "╮", "bottom_left": "╰", "bottom_right": "╯"}
)
BOLD = BoxGlyphs(
    top_left="┏", top_right="┓", bottom_left="┗", bottom_right="┛",
    horizontal="━", vertical="┃", cross="╋",
    tee_left="┣", tee_right="┫", tee_top="┳", tee_bottom="┻",
)
ASCII = BoxGlyphs(
    top_left="+", top_right="+", bottom_left="+", bottom_right="+",
    horizontal="-", vertical="|", cross="+",
    tee_left="+", tee_right="+", tee_top="+", tee_bottom="+",
)

STANDARD_BOX_STYLES: dict[str, BoxGlyphs] = {
    "single": SINGLE,
    "double": DOUBLE,
    "rounded": ROUNDED,
    "bold": BOLD,
    "ascii": ASCII,
}


class ThemeColors(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    muted: str
    accent: str
    debug: str
    info: str
    success: str
    warning: str
    error: str
    critical: str


class ThemeSymbols(BaseModel):
    model_config = ConfigDict(frozen=True)

    debug: str = "⊙"
    info: str = "ℹ"
    success: str = "✓"
    warning: str = "⚠"
    error: str = "✗"
    critical: str = "‼"
    bullet: str = "•"
    arrow: str = "→"
    check: str = "✓"
    cross: str = "✗"


class Theme(BaseModel):
    """Named palette mapping levels and symbols to colors and glyphs.

    Themes are frozen and handed around by reference; a logger and any
    renderer given the same theme share one instance.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    colors: ThemeColors
    symbols: ThemeSymbols = Field(default_factory=ThemeSymbols)
    box_style: BoxStyle = "single"
    box_styles: Mapping[str, BoxGlyphs] = Field(
        default_factory=lambda: MappingProxyType(dict(STANDARD_BOX_STYLES))
    )

    @field_validator("box_styles", mode="after")
    @classmethod
    def freeze_box_styles(cls, value: Mapping[str, BoxGlyphs]) -> Mapping[str, BoxGlyphs]:
        return MappingProxyType(dict(value))

    @field_serializer("box_styles")
    def dump_box_styles(self, value: Mapping[str, BoxGlyphs]) -> dict[str, Any]:
        return {name: glyphs.model_dump() for name, glyphs in value.items()}

    def get(self, level: LogLevel) -> str:
        """Color code for a log level."""
        return getattr(self.colors, level.key)

    def symbol(self, level: LogLevel) -> str:
        return getattr(self.symbols, level.key)

    def glyphs(self, style: str | None = None) -> BoxGlyphs:
        """Glyph set for ``style``, falling back to the theme's default style."""
        if style and style in self.box_styles:
            return self.box_styles[style]
        return self.box_styles.get(self.box_style, SINGLE)

    @property
    def box(self) -> BoxGlyphs:
        return self.glyphs()


DEFAULT_THEME = Theme(
    name="default",
    colors=ThemeColors(
        primary=CODES["bright_cyan"],
        secondary=CODES["cyan"],
        muted=CODES["gray"],
        accent=CODES["bright_magenta"],
        debug=CODES["gray"],
        info=CODES["blue"],
        success=CODES["green"],
        warning=CODES["yellow"],
        error=CODES["red"],
        critical=CODES["bright_red"] + CODES["bright"],
    ),
)

DRACULA_THEME = Theme(
    name="dracula",
    colors=ThemeColors(
        primary=hex_color("#bd93f9"),
        secondary=hex_color("#8be9fd"),
        muted=hex_color("#6272a4"),
        accent=hex_color("#f1fa8c"),
        debug=hex_color("#6272a4"),
        info=hex_color("#8be9fd"),
        success=hex_color("#50fa7b"),
        warning=hex_color("#ffb86c"),
        error=hex_color("#ff5555"),
        critical=hex_color("#ff5555") + CODES["bright"],
    ),
    symbols=ThemeSymbols(info="ⓘ", critical="⚠", bullet="▪", arrow="➜"),
    box_style="rounded",
)

NEON_THEME = Theme(
    name="neon",
    colors=ThemeColors(
        primary=hex_color("#e135ff"),
        secondary=hex_color("#80ffea"),
        muted=hex_color("#555566"),
        accent=hex_color("#ff6ac1"),
        debug=hex_color("#555566"),
        info=hex_color("#80ffea"),
        success=hex_color("#50fa7b"),
        warning=hex_color("#f1fa8c"),
        error=hex_color("#ff6363"),
        critical=hex_color("#e135ff") + CODES["bright"],
    ),
    symbols=ThemeSymbols(info="◆", debug="◇", bullet="▸", arrow="⟶"),
    box_style="bold",
)

OCEAN_THEME = Theme(
    name="ocean",
    colors=ThemeColors(
        primary=hex_color("#4fc3f7"),
        secondary=hex_color("#81d4fa"),
        muted=hex_color("#546e7a"),
        accent=hex_color("#26c6da"),
        debug=hex_color("#546e7a"),
        info=hex_color("#29b6f6"),
        success=hex_color("#66bb6a"),
        warning=hex_color("#ffca28"),
        error=hex_color("#ef5350"),
        critical=hex_color("#d32f2f") + CODES["bright"],
    ),
    symbols=ThemeSymbols(bullet="≈"),
    box_style="double",
)

MINIMAL_THEME = Theme(
    name="minimal",
    colors=ThemeColors(
        primary=CODES["bright"],
        secondary=CODES["white"],
        muted=CODES["dim"],
        accent=CODES["underscore"],
        debug=CODES["dim"],
        info=CODES["white"],
        success=CODES["white"],
        warning=CODES["bright"],
        error=CODES["bright"],
        critical=CODES["reverse"],
    ),
    symbols=ThemeSymbols(
        debug=".", info="i", success="+", warning="!", error="x", critical="!!",
        bullet="-", arrow=">", check="+", cross="x",
    ),
    box_style="ascii",
)

_REGISTRY: dict[str, Theme] = {
    theme.name: theme
    for theme in (DEFAULT_THEME, DRACULA_THEME, NEON_THEME, OCEAN_THEME, MINIMAL_THEME)
}


def register_theme(theme: Theme) -> Theme:
    """Add or replace a named theme."""
    _REGISTRY[theme.name.lower()] = theme
    return theme


def get_theme(name: str) -> Theme:
    """Look up a registered theme by name."""
    try:
        return _REGISTRY[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY))
        raise ConfigError(f"Unknown theme {name!r}; expected one of: {known}.") from None


def available_themes() -> list[str]:
    return sorted(_REGISTRY)
