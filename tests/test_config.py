"""Tests for the config builder and environment settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from genesis_trace.config import ConfigBuilder, EngineSettings, load_settings
from genesis_trace.exceptions import ConfigError
from genesis_trace.models import LogLevel
from genesis_trace.plugins import FileLoggerPlugin, SlackLoggerPlugin
from genesis_trace.themes import get_theme


def _set_env(monkeypatch: Any, tmp_path: Path, **overrides: str) -> None:
    monkeypatch.chdir(tmp_path)
    values = {
        "GENESIS_TRACE_THEME": "ocean",
        "GENESIS_TRACE_NAMESPACE": "billing.api",
        "GENESIS_TRACE_LOG_LEVEL": "debug",
        "GENESIS_TRACE_MAX_HISTORY_SIZE": "50",
    }
    values.update(overrides)
    for key, value in values.items():
        monkeypatch.setenv(key, value)


def test_builder_produces_frozen_config() -> None:
    config = (
        ConfigBuilder()
        .theme("dracula")
        .namespace("app.worker")
        .log_level("warn")
        .timestamp_format("YYYY-MM-DD HH:mm:ss")
        .enable_history(False)
        .max_history_size(25)
        .build()
    )
    assert config.theme is get_theme("dracula")
    assert config.namespace == ("app", "worker")
    assert config.min_level is LogLevel.WARNING
    assert config.history_enabled is False
    assert config.max_history_size == 25
    with pytest.raises(ValidationError):
        config.max_history_size = 10  # type: ignore[misc]


def test_builder_defaults() -> None:
    config = ConfigBuilder().build()
    assert config.theme.name == "default"
    assert config.namespace == ()
    assert config.min_level is LogLevel.INFO
    assert config.timestamp_format == "HH:mm:ss"
    assert config.plugins == ()


@pytest.mark.parametrize(
    "configure",
    [
        lambda builder: builder.max_history_size(0),
        lambda builder: builder.max_history_size(-3),
        lambda builder: builder.theme("sepia"),
        lambda builder: builder.log_level("verbose"),
        lambda builder: builder.log_level("critical"),
        lambda builder: builder.timestamp_format("  "),
        lambda builder: builder.plugin("not-a-sink"),
    ],
)
def test_invalid_builder_input_fails_at_build(configure: Any) -> None:
    builder = configure(ConfigBuilder())
    with pytest.raises(ConfigError):
        builder.build()


def test_plugins_keep_attachment_order(tmp_path: Path) -> None:
    first = FileLoggerPlugin(tmp_path / "a.log")
    second = FileLoggerPlugin(tmp_path / "b.log")
    config = ConfigBuilder().plugin(first).plugin(second).build()
    assert config.plugins == (first, second)


def test_settings_seed_builder_with_sinks(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(
        monkeypatch,
        tmp_path,
        GENESIS_TRACE_LOG_FILE=str(tmp_path / "logs" / "app.log"),
        GENESIS_TRACE_LOG_FILE_FORMAT="json",
        GENESIS_TRACE_SLACK_WEBHOOK_URL="https://hooks.slack.com/services/T000/B000/XXXX",
        GENESIS_TRACE_SLACK_CHANNEL="#alerts",
    )
    settings = load_settings()
    config = ConfigBuilder.from_settings(settings).build()

    assert config.theme.name == "ocean"
    assert config.namespace == ("billing", "api")
    assert config.min_level is LogLevel.DEBUG
    assert config.max_history_size == 50
    file_sink, slack_sink = config.plugins
    assert isinstance(file_sink, FileLoggerPlugin)
    assert file_sink.format == "json"
    assert isinstance(slack_sink, SlackLoggerPlugin)
    assert slack_sink.channel == "#alerts"
    assert slack_sink.min_level is LogLevel.ERROR


def test_settings_without_sinks(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path, GENESIS_TRACE_LOG_FILE="", GENESIS_TRACE_SLACK_WEBHOOK_URL="")
    settings = EngineSettings()
    assert settings.log_file is None
    assert settings.slack_webhook_url is None
    assert ConfigBuilder.from_settings(settings).build().plugins == ()


def test_safe_summary_hides_webhook(monkeypatch: Any, tmp_path: Path) -> None:
    url = "https://hooks.slack.com/services/T000/B000/XXXX"
    _set_env(monkeypatch, tmp_path, GENESIS_TRACE_SLACK_WEBHOOK_URL=url)
    settings = load_settings()
    summary = settings.safe_summary()
    assert summary["slack_enabled"] is True
    assert url not in str(summary)
    assert url not in repr(settings)


@pytest.mark.parametrize(
    "overrides",
    [
        {"GENESIS_TRACE_SLACK_WEBHOOK_URL": "http://hooks.example.com/x"},
        {"GENESIS_TRACE_THEME": "sepia"},
        {"GENESIS_TRACE_LOG_LEVEL": "loud"},
        {"GENESIS_TRACE_MAX_HISTORY_SIZE": "0"},
    ],
)
def test_invalid_settings_raise_config_error(
    monkeypatch: Any, tmp_path: Path, overrides: dict[str, str]
) -> None:
    _set_env(monkeypatch, tmp_path, **overrides)
    with pytest.raises(ConfigError):
        load_settings()
