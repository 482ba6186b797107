"""Shared plumbing for renderers and widgets bound to a theme and an output."""

from __future__ import annotations

from ..colors import colorize
from ..output import OutputSink
from ..themes import DEFAULT_THEME, Theme


class Renderer:
    """Holds the theme, output and color decision every renderer needs."""

    def __init__(
        self,
        theme: Theme | None = None,
        output: OutputSink | None = None,
        *,
        colorize: bool | None = None,
    ) -> None:
        self.theme = theme or DEFAULT_THEME
        self.output = output or OutputSink()
        self.use_color = self.output.resolve_color(colorize)

    def paint(self, text: str, color: str | None) -> str:
        return colorize(text, color, self.use_color)

    def emit(self, lines: list[str]) -> list[str]:
        self.output.lines(lines)
        return lines
