"""Explicit output destination handed to loggers and renderers."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console

CLEAR_LINE = "\x1b[2K"


class OutputSink:
    """Thin writer over a rich ``Console``'s file.

    Renderers produce pre-styled ANSI text, so lines are written to the
    console's file verbatim instead of going through rich markup. The console
    still decides terminal width and whether color is appropriate.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    @property
    def width(self) -> int:
        return self.console.width

    @property
    def color_enabled(self) -> bool:
        return self.console.color_system is not None and not self.console.no_color

    @property
    def is_terminal(self) -> bool:
        return self.console.is_terminal

    def write(self, text: str) -> None:
        stream = self.console.file
        stream.write(text)
        stream.flush()

    def line(self, text: str = "") -> None:
        self.write(f"{text}\n")

    def lines(self, lines: Iterable[str]) -> None:
        self.write("".join(f"{line}\n" for line in lines))

    def redraw(self, text: str) -> None:
        """Overwrite the current terminal line in place."""
        prefix = CLEAR_LINE if self.is_terminal else ""
        self.write(f"\r{prefix}{text}")

    def resolve_color(self, requested: bool | None) -> bool:
        """Explicit choice wins; otherwise follow the console's capabilities."""
        return self.color_enabled if requested is None else requested
