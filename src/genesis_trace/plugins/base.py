"""Sink contract shared by every log destination."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..models import LogEntry, LogLevel

if TYPE_CHECKING:
    from ..config import LoggerConfig


class Sink(ABC):
    """Base contract for destinations that receive fanned-out log entries.

    ``handle`` may raise; the logger isolates each sink so one failure never
    reaches the caller or the other sinks. ``degrade_on_error`` decides
    whether the first failure takes the sink out of the pipeline.
    """

    id: str = "sink"
    degrade_on_error: bool = True

    def __init__(self, *, min_level: LogLevel | str = LogLevel.DEBUG) -> None:
        self.min_level = LogLevel.parse(min_level)

    def accepts(self, level: LogLevel) -> bool:
        return level >= self.min_level

    def start(self, config: LoggerConfig) -> None:
        """Called once when a logger adopts this sink."""

    @abstractmethod
    def handle(self, entry: LogEntry) -> None:
        """Deliver one entry."""

    async def flush(self) -> None:
        """Complete any outstanding buffered or asynchronous work."""

    async def close(self) -> None:
        """Release resources after the final flush."""
