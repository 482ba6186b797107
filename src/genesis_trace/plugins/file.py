"""Append-only, size-rotated log file sink."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import IO, Any, Literal

from ..exceptions import SinkError
from ..models import LogEntry, LogLevel
from ..redaction import sanitize_metadata, sanitize_text
from .base import Sink


def _json_default(value: Any) -> Any:
    """Fallback serializer for metadata values json cannot encode natively."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC).isoformat()
        return value.astimezone(UTC).isoformat()
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


class FileLoggerPlugin(Sink):
    """Write UTF-8 lines to ``filepath``, rotating once ``max_size`` bytes is exceeded.

    Rotated files are named ``<file>.1`` (newest) through ``<file>.<max_files>``
    (oldest); anything older is deleted. Writes go through a buffered handle
    that is flushed on :meth:`flush`.
    """

    def __init__(
        self,
        filepath: str | Path,
        *,
        max_size: int | None = 10 * 1024 * 1024,
        max_files: int = 5,
        append: bool = True,
        format: Literal["text", "json"] = "text",
        min_level: LogLevel | str = LogLevel.DEBUG,
    ) -> None:
        super().__init__(min_level=min_level)
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be > 0 when set.")
        if max_files < 0:
            raise ValueError("max_files must be >= 0.")
        self.path = Path(filepath)
        self.max_size = max_size
        self.max_files = max_files
        self.append = append
        self.format = format
        self.id = f"file:{self.path}"
        self._fh: IO[str] | None = None
        self._size = 0
        self._truncate_next_open = not append

    def format_entry(self, entry: LogEntry) -> str:
        metadata = sanitize_metadata(dict(entry.metadata))
        message = sanitize_text(entry.message)
        if self.format == "json":
            record = entry.to_dict()
            record["message"] = message
            record["metadata"] = metadata
            return json.dumps(record, ensure_ascii=False, default=_json_default)
        line = f"{entry.timestamp.isoformat()} [{entry.level.name}]"
        if entry.namespace:
            line += f" {entry.namespace_path}:"
        line += f" {message}"
        if metadata:
            line += " " + json.dumps(metadata, ensure_ascii=False, default=_json_default)
        return line

    def handle(self, entry: LogEntry) -> None:
        payload = self.format_entry(entry) + "\n"
        size = len(payload.encode("utf-8"))
        try:
            handle = self._open()
            if self.max_size is not None and self._size > 0 and self._size + size > self.max_size:
                self._rotate()
                handle = self._open()
            handle.write(payload)
        except OSError as exc:
            raise SinkError(f"Failed writing log file {self.path}: {exc}", sink_id=self.id) from exc
        self._size += size

    def _open(self) -> IO[str]:
        if self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            mode = "w" if self._truncate_next_open else "a"
            self._fh = self.path.open(mode, encoding="utf-8")
            self._truncate_next_open = False
            self._size = self.path.stat().st_size
        return self._fh

    def _rotate(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
        if self.max_files == 0:
            self.path.unlink(missing_ok=True)
            return
        oldest = self.path.with_name(f"{self.path.name}.{self.max_files}")
        oldest.unlink(missing_ok=True)
        for index in range(self.max_files - 1, 0, -1):
            source = self.path.with_name(f"{self.path.name}.{index}")
            if source.exists():
                source.replace(self.path.with_name(f"{self.path.name}.{index + 1}"))
        self.path.replace(self.path.with_name(f"{self.path.name}.1"))

    def rotated_files(self) -> list[Path]:
        """Existing rotated files, newest first."""
        candidates = (
            self.path.with_name(f"{self.path.name}.{index}")
            for index in range(1, self.max_files + 1)
        )
        return [path for path in candidates if path.exists()]

    async def flush(self) -> None:
        if self._fh is None:
            return
        try:
            self._fh.flush()
        except OSError as exc:
            raise SinkError(f"Failed flushing log file {self.path}: {exc}", sink_id=self.id) from exc

    async def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
