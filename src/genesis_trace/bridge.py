"""Forward standard-library log records into a structured :class:`Logger`."""

from __future__ import annotations

import logging

from .logger import Logger
from .models import LogLevel
from .redaction import sanitize_text


def level_from_record(level_no: int) -> LogLevel:
    if level_no >= logging.CRITICAL:
        return LogLevel.CRITICAL
    if level_no >= logging.ERROR:
        return LogLevel.ERROR
    if level_no >= logging.WARNING:
        return LogLevel.WARNING
    if level_no >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


class LoggingBridge(logging.Handler):
    """Route a stdlib logger's records into the structured pipeline.

    ``attach`` swaps the target's handlers for this bridge and ``detach``
    puts the originals back.
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target = logger
        self._attached: logging.Logger | None = None
        self._original_handlers: list[logging.Handler] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            metadata: dict[str, str] = {"logger": record.name}
            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                metadata["exception"] = sanitize_text(formatter.formatException(record.exc_info))
            self.target.log(
                level_from_record(record.levelno),
                sanitize_text(record.getMessage()),
                metadata,
            )
        except Exception:
            self.handleError(record)

    def attach(self, std_logger: logging.Logger) -> None:
        if self._attached is not None:
            self.detach()
        self._attached = std_logger
        self._original_handlers = list(std_logger.handlers)
        std_logger.handlers = [self]

    def detach(self) -> None:
        if self._attached is None:
            return
        self._attached.handlers = self._original_handlers
        self._attached = None
        self._original_handlers = []
