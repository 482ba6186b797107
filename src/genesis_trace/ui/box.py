"""Framed boxes with an optional title embedded in the top border."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from ..colors import visible_width
from ..formatting import pad, truncate
from ..models import LogLevel
from .base import Renderer

MessageKind = Literal["success", "warning", "error", "info"]

_KIND_LEVELS: dict[str, LogLevel] = {
    "success": LogLevel.SUCCESS,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "info": LogLevel.INFO,
}


def _as_lines(content: str | Sequence[str]) -> list[str]:
    if isinstance(content, str):
        return content.split("\n")
    return [str(line) for line in content] or [""]


class BoxRenderer(Renderer):
    """Draw content inside a border from the theme's glyph sets.

    The interior is ``max(min_width, longest line + 2 * padding)`` columns
    wide. Content lines are padded, never truncated or wrapped.
    """

    def format(
        self,
        content: str | Sequence[str],
        *,
        title: str | None = None,
        style: str | None = None,
        color: str | None = None,
        padding: int = 1,
        margin: int = 0,
        min_width: int = 0,
    ) -> list[str]:
        lines = _as_lines(content)
        padding = max(0, padding)
        margin = max(0, margin)
        glyphs = self.theme.glyphs(style)
        border_color = color or self.theme.colors.primary
        longest = max(visible_width(line) for line in lines)
        inner = max(min_width, longest + 2 * padding)

        top = glyphs.horizontal * inner
        # "─ title ─" needs two glyphs and two spaces around the title
        room = inner - 4
        if title and room >= 1:
            label = truncate(title, room)
            rest = inner - visible_width(label) - 3
            top = (
                self.paint(glyphs.top_left + glyphs.horizontal + " ", border_color)
                + self.paint(label, self.theme.colors.accent)
                + self.paint(" " + glyphs.horizontal * rest + glyphs.top_right, border_color)
            )
        else:
            top = self.paint(glyphs.top_left + top + glyphs.top_right, border_color)

        side = self.paint(glyphs.vertical, border_color)
        gutter = " " * padding
        body = [
            f"{side}{gutter}{pad(line, inner - 2 * padding)}{gutter}{side}" for line in lines
        ]
        bottom = self.paint(
            glyphs.bottom_left + glyphs.horizontal * inner + glyphs.bottom_right,
            border_color,
        )

        indent = " " * margin
        framed = [f"{indent}{line}" for line in (top, *body, bottom)]
        spacer = [""] * margin
        return [*spacer, *framed, *spacer]

    def render(
        self,
        content: str | Sequence[str],
        *,
        title: str | None = None,
        style: str | None = None,
        color: str | None = None,
        padding: int = 1,
        margin: int = 0,
        min_width: int = 0,
    ) -> list[str]:
        return self.emit(
            self.format(
                content,
                title=title,
                style=style,
                color=color,
                padding=padding,
                margin=margin,
                min_width=min_width,
            )
        )

    def format_message(self, text: str, kind: MessageKind = "info") -> list[str]:
        """One-line box prefixed with the kind's symbol, colored by level."""
        level = _KIND_LEVELS.get(kind)
        if level is None:
            raise ValueError(f"Unknown message kind: {kind!r}")
        color = self.theme.get(level)
        line = f"{self.paint(self.theme.symbol(level), color)} {text}"
        return self.format(line, color=color)

    def message(self, text: str, kind: MessageKind = "info") -> list[str]:
        return self.emit(self.format_message(text, kind))
