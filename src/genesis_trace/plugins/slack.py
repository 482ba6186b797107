"""Best-effort Slack incoming-webhook sink."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..models import LogEntry, LogLevel
from ..redaction import sanitize_metadata, sanitize_text
from .base import Sink

_LEVEL_EMOJI = {
    LogLevel.DEBUG: ":mag:",
    LogLevel.INFO: ":information_source:",
    LogLevel.SUCCESS: ":white_check_mark:",
    LogLevel.WARNING: ":warning:",
    LogLevel.ERROR: ":x:",
    LogLevel.CRITICAL: ":rotating_light:",
}


class SlackLoggerPlugin(Sink):
    """POST ``{text, channel}`` to a webhook for entries at or above ``min_level``.

    Inside a running event loop each entry is posted by a background task;
    outside one, payloads wait in a queue. :meth:`flush` awaits the tasks and
    drains the queue. Failures are reported once through ``logger`` and never
    retried.
    """

    degrade_on_error = False

    def __init__(
        self,
        webhook_url: str,
        *,
        channel: str | None = None,
        min_level: LogLevel | str = LogLevel.ERROR,
        username: str | None = None,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(min_level=min_level)
        if not webhook_url.startswith(("https://", "http://")):
            raise ValueError("webhook_url must be an http(s) URL.")
        self.webhook_url = webhook_url
        self.channel = channel
        self.username = username
        self.id = f"slack:{channel or 'default'}"
        self.logger = logger or logging.getLogger("genesis_trace.plugins.slack")
        self._timeout = timeout_seconds
        self._client = client
        self._owns_client = client is None
        self._tasks: set[asyncio.Task[None]] = set()
        self._pending: list[dict[str, Any]] = []
        self._warned = False
        self.delivered = 0
        self.failed = 0

    def build_payload(self, entry: LogEntry) -> dict[str, Any]:
        origin = f" `{entry.namespace_path}`" if entry.namespace else ""
        lines = [
            f"{_LEVEL_EMOJI[entry.level]} *{entry.level.name}*{origin} {sanitize_text(entry.message)}"
        ]
        for key, value in sanitize_metadata(dict(entry.metadata)).items():
            lines.append(f"• {key}: {value}")
        payload: dict[str, Any] = {"text": "\n".join(lines)}
        if self.channel is not None:
            payload["channel"] = self.channel
        if self.username:
            payload["username"] = self.username
        return payload

    def handle(self, entry: LogEntry) -> None:
        payload = self.build_payload(entry)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._pending.append(payload)
            return
        task = loop.create_task(self._post(payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def outstanding(self) -> int:
        return len(self._tasks) + len(self._pending)

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _post(self, payload: dict[str, Any]) -> None:
        try:
            response = await self._ensure_client().post(self.webhook_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._record_failure(f"HTTP {exc.response.status_code}")
        except httpx.HTTPError as exc:
            self._record_failure(type(exc).__name__)
        else:
            self.delivered += 1

    def _record_failure(self, reason: str) -> None:
        self.failed += 1
        if self._warned:
            return
        self._warned = True
        self.logger.warning(
            "Slack delivery failed for sink %s (%s); further failures are suppressed",
            self.id,
            sanitize_text(reason),
        )

    async def flush(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
        while self._pending:
            await self._post(self._pending.pop(0))

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
