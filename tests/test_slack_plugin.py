"""Tests for best-effort Slack webhook delivery."""

from __future__ import annotations

import asyncio
import io
import json
import logging
from typing import Any

import httpx
import pytest
from rich.console import Console

from genesis_trace.config import ConfigBuilder
from genesis_trace.logger import Logger
from genesis_trace.models import LogEntry, LogLevel
from genesis_trace.output import OutputSink
from genesis_trace.plugins import SlackLoggerPlugin
from genesis_trace.redaction import REDACTED

WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"
SLACK_LOGGER = "tests.genesis_trace.slack"


def _make_entry(
    message: str,
    *,
    level: LogLevel = LogLevel.ERROR,
    metadata: dict[str, Any] | None = None,
) -> LogEntry:
    return LogEntry(
        sequence=1,
        level=level,
        message=message,
        namespace=("billing", "api"),
        metadata=metadata or {},
    )


def _make_plugin(
    status_code: int = 200,
    **overrides: Any,
) -> tuple[SlackLoggerPlugin, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def _fake_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, text="ok")

    client = httpx.AsyncClient(transport=httpx.MockTransport(_fake_handler))
    plugin = SlackLoggerPlugin(
        WEBHOOK,
        channel="#alerts",
        client=client,
        logger=logging.getLogger(SLACK_LOGGER),
        **overrides,
    )
    return plugin, requests


def test_payload_has_text_and_channel() -> None:
    plugin, _ = _make_plugin(username="ci-bot")
    payload = plugin.build_payload(
        _make_entry("Charge failed", metadata={"order": 991, "token": "t-abc"})
    )
    assert payload["channel"] == "#alerts"
    assert payload["username"] == "ci-bot"
    lines = payload["text"].splitlines()
    assert lines[0] == ":x: *ERROR* `billing.api` Charge failed"
    assert "• order: 991" in lines
    assert f"• token: {REDACTED}" in lines


def test_payload_omits_channel_when_unset() -> None:
    plugin = SlackLoggerPlugin(WEBHOOK, logger=logging.getLogger(SLACK_LOGGER))
    payload = plugin.build_payload(_make_entry("Charge failed"))
    assert set(payload) == {"text"}
    assert plugin.id == "slack:default"


def test_default_threshold_is_error() -> None:
    plugin, _ = _make_plugin()
    assert not plugin.accepts(LogLevel.WARNING)
    assert plugin.accepts(LogLevel.ERROR)
    assert plugin.accepts(LogLevel.CRITICAL)
    assert plugin.id == "slack:#alerts"


def test_entries_outside_a_loop_are_queued_until_flush() -> None:
    plugin, requests = _make_plugin()
    plugin.handle(_make_entry("first"))
    plugin.handle(_make_entry("second"))
    assert plugin.outstanding == 2
    assert requests == []

    asyncio.run(plugin.flush())
    assert plugin.outstanding == 0
    assert plugin.delivered == 2
    bodies = [json.loads(request.content) for request in requests]
    assert [body["channel"] for body in bodies] == ["#alerts", "#alerts"]
    assert bodies[0]["text"].endswith("first")
    assert str(requests[0].url) == WEBHOOK


def test_entries_inside_a_loop_post_in_background() -> None:
    plugin, requests = _make_plugin()

    async def _scenario() -> None:
        plugin.handle(_make_entry("in loop"))
        assert plugin.outstanding == 1
        await plugin.flush()

    asyncio.run(_scenario())
    assert plugin.delivered == 1
    assert len(requests) == 1


def test_failures_warn_once_and_are_not_retried(caplog: pytest.LogCaptureFixture) -> None:
    plugin, requests = _make_plugin(status_code=500)
    plugin.handle(_make_entry("one"))
    plugin.handle(_make_entry("two"))

    with caplog.at_level(logging.WARNING, logger=SLACK_LOGGER):
        asyncio.run(plugin.flush())

    assert len(requests) == 2
    assert plugin.failed == 2
    assert plugin.delivered == 0
    warnings = [record for record in caplog.records if record.name == SLACK_LOGGER]
    assert len(warnings) == 1
    assert "HTTP 500" in warnings[0].getMessage()


def test_logger_shutdown_awaits_slack_delivery() -> None:
    plugin, requests = _make_plugin()
    output = OutputSink(Console(file=io.StringIO(), color_system=None))
    logger = Logger(ConfigBuilder().plugin(plugin).build(), output=output)

    logger.warning("below threshold")
    logger.error("Payment provider down", {"provider": "acme"})
    assert requests == []

    asyncio.run(logger.shutdown())
    assert len(requests) == 1
    assert "Payment provider down" in json.loads(requests[0].content)["text"]


def test_rejects_non_http_webhook() -> None:
    with pytest.raises(ValueError):
        SlackLoggerPlugin("ftp://example.com/hook")
