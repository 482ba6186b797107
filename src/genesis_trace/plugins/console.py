"""Default sink that prints themed lines to the output."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..colors import CODES, colorize
from ..formatting import timestamp
from ..models import LogEntry, LogLevel
from ..output import OutputSink
from ..themes import DEFAULT_THEME, Theme
from .base import Sink

if TYPE_CHECKING:
    from ..config import LoggerConfig

_LEVEL_LABEL_WIDTH = max(len(level.name) for level in LogLevel)


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value if value and " " not in value else json.dumps(value, ensure_ascii=False)
    return json.dumps(value, ensure_ascii=False, default=str)


def format_metadata(metadata: Mapping[str, Any]) -> str:
    """Render metadata as ``key=value`` pairs."""
    return " ".join(f"{key}={_format_value(value)}" for key, value in metadata.items())


class ConsoleSink(Sink):
    """Writes ``time symbol LEVEL [namespace] message key=value`` lines."""

    id = "console"

    def __init__(
        self,
        output: OutputSink | None = None,
        *,
        theme: Theme | None = None,
        timestamp_format: str = "HH:mm:ss",
        colorize: bool | None = None,
        min_level: LogLevel | str = LogLevel.DEBUG,
    ) -> None:
        super().__init__(min_level=min_level)
        self.output = output or OutputSink()
        self.theme = theme or DEFAULT_THEME
        self.timestamp_format = timestamp_format
        self.use_color = self.output.resolve_color(colorize)

    def start(self, config: LoggerConfig) -> None:
        self.theme = config.theme
        self.timestamp_format = config.timestamp_format

    def format_entry(self, entry: LogEntry) -> str:
        level_color = self.theme.get(entry.level)
        muted = self.theme.colors.muted
        parts = [
            colorize(
                timestamp(entry.timestamp.astimezone(), self.timestamp_format),
                muted,
                self.use_color,
            ),
            colorize(self.theme.symbol(entry.level), level_color, self.use_color),
            colorize(entry.level.name.ljust(_LEVEL_LABEL_WIDTH), level_color, self.use_color),
        ]
        if entry.namespace:
            parts.append(
                colorize(f"[{entry.namespace_path}]", self.theme.colors.accent, self.use_color)
            )
        message = entry.message
        if entry.level >= LogLevel.CRITICAL:
            message = colorize(message, CODES["bright"], self.use_color)
        parts.append(message)
        if entry.metadata:
            parts.append(colorize(format_metadata(entry.metadata), muted, self.use_color))
        return " ".join(parts)

    def handle(self, entry: LogEntry) -> None:
        self.output.line(self.format_entry(entry))
