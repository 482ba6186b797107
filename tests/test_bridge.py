"""Tests for forwarding stdlib log records into the structured logger."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console

from genesis_trace.bridge import LoggingBridge, level_from_record
from genesis_trace.config import ConfigBuilder
from genesis_trace.logger import Logger
from genesis_trace.models import LogLevel
from genesis_trace.output import OutputSink


def _make_logger() -> Logger:
    console = Console(file=io.StringIO(), width=120, color_system=None)
    config = ConfigBuilder().log_level("debug").namespace("bridge").build()
    return Logger(config, output=OutputSink(console), diagnostics=logging.getLogger("tests.bridge.diag"))


@pytest.mark.parametrize(
    ("level_no", "expected"),
    [
        (logging.DEBUG, LogLevel.DEBUG),
        (5, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARNING),
        (logging.ERROR, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.CRITICAL),
        (60, LogLevel.CRITICAL),
    ],
)
def test_level_from_record(level_no: int, expected: LogLevel) -> None:
    assert level_from_record(level_no) is expected


def test_attach_forwards_records_and_detach_restores_handlers() -> None:
    logger = _make_logger()
    std_logger = logging.getLogger("tests.bridge.worker")
    std_logger.setLevel(logging.DEBUG)
    std_logger.propagate = False
    original = logging.NullHandler()
    std_logger.handlers = [original]

    bridge = LoggingBridge(logger)
    bridge.attach(std_logger)
    assert std_logger.handlers == [bridge]

    std_logger.info("Fetched %d rows", 12)
    std_logger.warning("Retrying with token=abc123")
    bridge.detach()
    std_logger.info("Not forwarded")

    assert std_logger.handlers == [original]
    history = logger.get_history()
    assert [entry.level for entry in history] == [LogLevel.INFO, LogLevel.WARNING]
    assert history[0].message == "Fetched 12 rows"
    assert history[0].metadata["logger"] == "tests.bridge.worker"
    assert history[0].namespace == ("bridge",)
    assert "abc123" not in history[1].message
    assert "[REDACTED]" in history[1].message


def test_exception_text_is_attached_as_metadata() -> None:
    logger = _make_logger()
    std_logger = logging.getLogger("tests.bridge.failing")
    std_logger.setLevel(logging.DEBUG)
    std_logger.propagate = False
    bridge = LoggingBridge(logger)
    bridge.attach(std_logger)
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        std_logger.exception("Job crashed")
    finally:
        bridge.detach()

    (entry,) = logger.get_history()
    assert entry.level is LogLevel.ERROR
    assert entry.message == "Job crashed"
    assert "RuntimeError: boom" in entry.metadata["exception"]
