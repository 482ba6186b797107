"""Shared typed models for log levels and log entries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import IntEnum
from types import MappingProxyType
from typing import Any

NAMESPACE_DELIMITER = "."


class LogLevel(IntEnum):
    """Severity ordering; numeric values line up with the stdlib ``logging`` levels."""

    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: LogLevel | str | int) -> LogLevel:
        """Accept a level, its name (``"warn"`` included) or its number."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        name = value.strip().upper()
        if name == "WARN":
            name = "WARNING"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None


def split_namespace(value: str | tuple[str, ...] | list[str] | None) -> tuple[str, ...]:
    """Normalize a dotted string or segment sequence to a segment tuple."""
    if not value:
        return ()
    if isinstance(value, str):
        parts = value.split(NAMESPACE_DELIMITER)
    else:
        parts = [segment for item in value for segment in item.split(NAMESPACE_DELIMITER)]
    return tuple(part.strip() for part in parts if part.strip())


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One emitted log event; never mutated after it is appended to history."""

    sequence: int
    level: LogLevel
    message: str
    namespace: tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=UTC))
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def namespace_path(self) -> str:
        return NAMESPACE_DELIMITER.join(self.namespace)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequence": self.sequence,
            "ts": self.timestamp.isoformat(),
            "level": self.level.key,
            "namespace": self.namespace_path,
            "message": self.message,
            "metadata": dict(self.metadata),
        }
