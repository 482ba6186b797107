"""Large framed header blocks for the top of a report or session."""

from __future__ import annotations

from ..colors import CODES, code
from ..formatting import Align, pad, truncate
from .base import Renderer

MIN_BANNER_WIDTH = 8


class BannerRenderer(Renderer):
    """Framed block with a centered title and left-aligned secondary lines.

    ``width`` is the full outer width. Text that does not fit is cut with an
    ellipsis; nothing is wrapped.
    """

    def format(
        self,
        title: str,
        *,
        subtitle: str | None = None,
        description: str | None = None,
        version: str | None = None,
        author: str | None = None,
        width: int = 80,
        style: str | None = "double",
        color: str | None = None,
    ) -> list[str]:
        if width < MIN_BANNER_WIDTH:
            raise ValueError(f"Banner width must be >= {MIN_BANNER_WIDTH}.")
        glyphs = self.theme.glyphs(style)
        border_color = code(color) if color else self.theme.colors.primary
        inner = width - 2
        area = inner - 2

        def row(text: str, align: Align = "left") -> str:
            side = self.paint(glyphs.vertical, border_color)
            return f"{side} {pad(text, area, align)} {side}"

        colors = self.theme.colors
        heading = self.paint(truncate(title, area), border_color + CODES["bright"])
        body = [row(""), row(heading, "center")]
        if subtitle:
            body.append(row(self.paint(truncate(subtitle, area), colors.secondary)))
        if description:
            body.append(row(truncate(description, area)))
        footer = []
        if version:
            footer.append(version if version.startswith("v") else f"v{version}")
        if author:
            footer.append(f"by {author}")
        if footer:
            body.append(row(""))
            body.append(row(self.paint(truncate(" · ".join(footer), area), colors.muted)))
        body.append(row(""))

        top = self.paint(glyphs.top_left + glyphs.horizontal * inner + glyphs.top_right, border_color)
        bottom = self.paint(
            glyphs.bottom_left + glyphs.horizontal * inner + glyphs.bottom_right,
            border_color,
        )
        return [top, *body, bottom]

    def render(
        self,
        title: str,
        *,
        subtitle: str | None = None,
        description: str | None = None,
        version: str | None = None,
        author: str | None = None,
        width: int = 80,
        style: str | None = "double",
        color: str | None = None,
    ) -> list[str]:
        return self.emit(
            self.format(
                title,
                subtitle=subtitle,
                description=description,
                version=version,
                author=author,
                width=width,
                style=style,
                color=color,
            )
        )
