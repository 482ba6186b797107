"""Configure the engine's own diagnostic logger hierarchy."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any, TextIO

from .redaction import sanitize_text

DIAGNOSTICS_LOGGER = "genesis_trace"

# optional ``extra=`` attributes copied onto the JSON line
_CONTEXT_FIELDS = ("sink_id", "phase")


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per diagnostic record, with sink context when present."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "source": record.name,
            "event": sanitize_text(record.getMessage()),
        }
        for name in _CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                event[name] = value
        if record.exc_info:
            event["traceback"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str, ensure_ascii=False)


def setup_logger(
    name: str = DIAGNOSTICS_LOGGER,
    level: int | str = logging.WARNING,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Send engine diagnostics to ``stream`` (stderr by default) as JSON lines.

    The JSON handler is installed once per logger; later calls only change
    the level.
    """
    diagnostics = logging.getLogger(name)
    diagnostics.setLevel(level.upper() if isinstance(level, str) else level)
    diagnostics.propagate = False
    if not any(isinstance(handler.formatter, JsonConsoleFormatter) for handler in diagnostics.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonConsoleFormatter())
        diagnostics.addHandler(handler)
    return diagnostics
