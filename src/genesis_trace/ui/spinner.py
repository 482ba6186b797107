"""Caller-driven spinner widget."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from ..models import LogLevel
from ..output import OutputSink
from ..themes import Theme
from .base import Renderer

SpinnerState = Literal["idle", "running", "succeeded", "failed", "stopped"]

BRAILLE_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class Spinner(Renderer):
    """Frame cycle advanced only by :meth:`update`; there is no timer.

    ``interval`` (milliseconds) is advisory, for callers that sleep between
    updates. Updates outside the running state are ignored.
    """

    def __init__(
        self,
        message: str = "",
        *,
        frames: Sequence[str] = BRAILLE_FRAMES,
        interval: int = 80,
        colorize: bool | None = None,
        output: OutputSink | None = None,
        theme: Theme | None = None,
    ) -> None:
        if not frames:
            raise ValueError("frames must not be empty.")
        super().__init__(theme, output, colorize=colorize)
        self.message = message
        self.frames = tuple(frames)
        self.interval = interval
        self.frame_index = 0
        self.state: SpinnerState = "idle"

    @property
    def interval_seconds(self) -> float:
        return self.interval / 1000

    @property
    def running(self) -> bool:
        return self.state == "running"

    def format(self) -> str:
        frame = self.paint(self.frames[self.frame_index], self.theme.colors.primary)
        return f"{frame} {self.message}" if self.message else frame

    def start(self) -> None:
        if self.state != "idle":
            return
        self.state = "running"
        self.output.redraw(self.format())

    def update(self, message: str | None = None) -> None:
        if not self.running:
            return
        self.frame_index = (self.frame_index + 1) % len(self.frames)
        if message is not None:
            self.message = message
        self.output.redraw(self.format())

    def _finish(self, state: SpinnerState, level: LogLevel, message: str | None) -> None:
        if self.state in ("succeeded", "failed", "stopped"):
            return
        self.state = state
        if message is not None:
            self.message = message
        symbol = self.paint(self.theme.symbol(level), self.theme.get(level))
        self.output.redraw(f"{symbol} {self.message}" if self.message else symbol)
        self.output.write("\n")

    def succeed(self, message: str | None = None) -> None:
        self._finish("succeeded", LogLevel.SUCCESS, message)

    def fail(self, message: str | None = None) -> None:
        self._finish("failed", LogLevel.ERROR, message)

    def stop(self) -> None:
        """Clear the spinner line without printing a final status."""
        if self.state in ("succeeded", "failed", "stopped"):
            return
        self.state = "stopped"
        self.output.redraw("")
