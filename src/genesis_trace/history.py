"""Capacity-bounded log history shared by a logger and its children."""

from __future__ import annotations

from collections import deque

from .models import LogEntry, LogLevel, split_namespace


class History:
    """Keep the most recent entries, evicting the oldest first."""

    def __init__(self, *, max_entries: int = 1000) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0.")
        self.max_entries = max_entries
        self._entries: deque[LogEntry] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)
        while len(self._entries) > self.max_entries:
            self._entries.popleft()

    def snapshot(
        self,
        *,
        level: LogLevel | str | None = None,
        namespace: str | tuple[str, ...] | None = None,
    ) -> tuple[LogEntry, ...]:
        """Return a read-only filtered copy; the buffer itself is not touched.

        ``level`` matches exactly. ``namespace`` matches whole leading
        segments, so ``"app.db"`` selects ``app.db`` and ``app.db.pool`` but
        not ``app.dbx``.
        """
        wanted_level = LogLevel.parse(level) if level is not None else None
        prefix = split_namespace(namespace)
        return tuple(
            entry
            for entry in self._entries
            if (wanted_level is None or entry.level == wanted_level)
            and entry.namespace[: len(prefix)] == prefix
        )

