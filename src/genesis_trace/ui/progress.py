"""In-place progress bar driven by caller updates."""

from __future__ import annotations

from ..colors import CODES
from ..formatting import number, round_half_up
from ..output import OutputSink
from ..themes import Theme
from .base import Renderer

FILLED = "█"
EMPTY = "░"


class ProgressBar(Renderer):
    """Redraw one terminal line per :meth:`update`; :meth:`complete` ends it.

    ``current`` is clamped to ``[0, total]``. After completion further
    updates are ignored.
    """

    def __init__(
        self,
        total: float,
        *,
        width: int = 40,
        show_value: bool = True,
        show_percentage: bool = True,
        colorize: bool | None = None,
        output: OutputSink | None = None,
        theme: Theme | None = None,
    ) -> None:
        if total <= 0:
            raise ValueError("total must be > 0.")
        if width <= 0:
            raise ValueError("width must be > 0.")
        super().__init__(theme, output, colorize=colorize)
        self.total = total
        self.width = width
        self.show_value = show_value
        self.show_percentage = show_percentage
        self.message: str | None = None
        self.redraws = 0
        self._current: float = 0
        self._completed = False

    @property
    def current(self) -> float:
        return self._current

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def ratio(self) -> float:
        return self._current / self.total

    def _fill_color(self) -> str:
        if self.ratio < 1 / 3:
            return CODES["red"]
        if self.ratio < 2 / 3:
            return CODES["yellow"]
        return CODES["green"]

    def format(self) -> str:
        filled = round_half_up(self.width * self.ratio)
        bar = self.paint(FILLED * filled, self._fill_color()) + self.paint(
            EMPTY * (self.width - filled), self.theme.colors.muted
        )
        parts = [f"[{bar}]"]
        if self.show_percentage:
            parts.append(f"{self.ratio * 100:5.1f}%")
        if self.show_value:
            parts.append(f"({number(self._current)}/{number(self.total)})")
        if self.message:
            parts.append(self.message)
        return " ".join(parts)

    def _draw(self) -> None:
        self.output.redraw(self.format())
        self.redraws += 1

    def update(self, value: float, message: str | None = None) -> None:
        if self._completed:
            return
        self._current = min(max(value, 0), self.total)
        if message is not None:
            self.message = message
        self._draw()

    def increment(self, step: float = 1, message: str | None = None) -> None:
        self.update(self._current + step, message)

    def complete(self, message: str | None = None) -> None:
        if self._completed:
            return
        self._current = self.total
        if message is not None:
            self.message = message
        self._draw()
        self._completed = True
        self.output.write("\n")
