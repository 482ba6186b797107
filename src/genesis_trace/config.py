"""Immutable logger configuration, its fluent builder, and environment settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError
from .models import LogLevel, split_namespace
from .plugins.base import Sink
from .themes import DEFAULT_THEME, Theme, get_theme

MAX_CONFIGURABLE_LEVEL = LogLevel.ERROR


class LoggerConfig(BaseModel):
    """Frozen configuration consumed by :class:`genesis_trace.logger.Logger`.

    Changing anything means building a new config and a new logger.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    theme: Theme = DEFAULT_THEME
    namespace: tuple[str, ...] = ()
    min_level: LogLevel = LogLevel.INFO
    timestamp_format: str = "HH:mm:ss"
    history_enabled: bool = True
    max_history_size: int = 1000
    plugins: tuple[Sink, ...] = ()

    @field_validator("theme", mode="before")
    @classmethod
    def resolve_theme_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return get_theme(value)
        return value

    @field_validator("namespace", mode="before")
    @classmethod
    def split_namespace_value(cls, value: Any) -> tuple[str, ...]:
        return split_namespace(value)

    @field_validator("min_level", mode="before")
    @classmethod
    def parse_level(cls, value: Any) -> LogLevel:
        level = LogLevel.parse(value)
        if level > MAX_CONFIGURABLE_LEVEL:
            raise ValueError(
                f"log level cannot be above {MAX_CONFIGURABLE_LEVEL.key!r}; "
                "errors and critical entries are always emitted."
            )
        return level

    @model_validator(mode="after")
    def validate_limits(self) -> LoggerConfig:
        if self.max_history_size <= 0:
            raise ValueError("max_history_size must be > 0.")
        if not self.timestamp_format.strip():
            raise ValueError("timestamp_format must not be empty.")
        return self


class ConfigBuilder:
    """Fluent builder; every setter returns the builder, ``build()`` validates."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._plugins: list[Any] = []

    def theme(self, theme: Theme | str) -> ConfigBuilder:
        self._values["theme"] = theme
        return self

    def namespace(self, namespace: str) -> ConfigBuilder:
        self._values["namespace"] = namespace
        return self

    def log_level(self, level: LogLevel | str) -> ConfigBuilder:
        self._values["min_level"] = level
        return self

    def timestamp_format(self, pattern: str) -> ConfigBuilder:
        self._values["timestamp_format"] = pattern
        return self

    def enable_history(self, enabled: bool = True) -> ConfigBuilder:
        self._values["history_enabled"] = enabled
        return self

    def max_history_size(self, size: int) -> ConfigBuilder:
        self._values["max_history_size"] = size
        return self

    def plugin(self, plugin: Sink) -> ConfigBuilder:
        self._plugins.append(plugin)
        return self

    def build(self) -> LoggerConfig:
        """Validate everything now so misconfiguration never surfaces at first use."""
        try:
            return LoggerConfig(**self._values, plugins=tuple(self._plugins))
        except ValidationError as exc:
            raise ConfigError(f"Invalid logger configuration: {exc}") from exc

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> ConfigBuilder:
        """Seed a builder from environment settings, including configured sinks."""
        from .plugins.file import FileLoggerPlugin
        from .plugins.slack import SlackLoggerPlugin

        builder = (
            cls()
            .theme(settings.theme)
            .log_level(settings.log_level)
            .timestamp_format(settings.timestamp_format)
            .enable_history(settings.history_enabled)
            .max_history_size(settings.max_history_size)
        )
        if settings.namespace:
            builder.namespace(settings.namespace)
        if settings.log_file is not None:
            builder.plugin(
                FileLoggerPlugin(
                    settings.log_file,
                    max_size=settings.log_file_max_bytes,
                    max_files=settings.log_file_max_files,
                    format=settings.log_file_format,
                )
            )
        if settings.slack_webhook_url:
            builder.plugin(
                SlackLoggerPlugin(
                    settings.slack_webhook_url,
                    channel=settings.slack_channel,
                    min_level=settings.slack_min_level,
                )
            )
        return builder


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    theme: str = Field(default="default", alias="GENESIS_TRACE_THEME")
    namespace: str | None = Field(default=None, alias="GENESIS_TRACE_NAMESPACE")
    log_level: str = Field(default="info", alias="GENESIS_TRACE_LOG_LEVEL")
    timestamp_format: str = Field(default="HH:mm:ss", alias="GENESIS_TRACE_TIMESTAMP_FORMAT")
    history_enabled: bool = Field(default=True, alias="GENESIS_TRACE_HISTORY_ENABLED")
    max_history_size: int = Field(default=1000, alias="GENESIS_TRACE_MAX_HISTORY_SIZE")

    log_file: Path | None = Field(default=None, alias="GENESIS_TRACE_LOG_FILE")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024,
        alias="GENESIS_TRACE_LOG_FILE_MAX_BYTES",
    )
    log_file_max_files: int = Field(default=5, alias="GENESIS_TRACE_LOG_FILE_MAX_FILES")
    log_file_format: Literal["text", "json"] = Field(
        default="text",
        alias="GENESIS_TRACE_LOG_FILE_FORMAT",
    )

    slack_webhook_url: str | None = Field(
        default=None, alias="GENESIS_TRACE_SLACK_WEBHOOK_URL", repr=False
    )
    slack_channel: str | None = Field(default=None, alias="GENESIS_TRACE_SLACK_CHANNEL")
    slack_min_level: str = Field(default="error", alias="GENESIS_TRACE_SLACK_MIN_LEVEL")

    @field_validator(
        "namespace",
        "log_file",
        "slack_webhook_url",
        "slack_channel",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_values(self) -> EngineSettings:
        get_theme(self.theme)
        for name in ("log_level", "slack_min_level"):
            LogLevel.parse(getattr(self, name))
        if self.max_history_size <= 0:
            raise ValueError("GENESIS_TRACE_MAX_HISTORY_SIZE must be > 0.")
        if self.log_file_max_bytes <= 0:
            raise ValueError("GENESIS_TRACE_LOG_FILE_MAX_BYTES must be > 0.")
        if self.log_file_max_files < 0:
            raise ValueError("GENESIS_TRACE_LOG_FILE_MAX_FILES must be >= 0.")
        if self.slack_webhook_url is not None and not self.slack_webhook_url.startswith("https://"):
            raise ValueError("GENESIS_TRACE_SLACK_WEBHOOK_URL must be an https URL.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return a settings summary safe to print (no webhook URL)."""
        return {
            "theme": self.theme,
            "namespace": self.namespace,
            "log_level": self.log_level,
            "timestamp_format": self.timestamp_format,
            "history_enabled": self.history_enabled,
            "max_history_size": self.max_history_size,
            "log_file": str(self.log_file) if self.log_file else None,
            "log_file_format": self.log_file_format,
            "slack_enabled": self.slack_webhook_url is not None,
            "slack_channel": self.slack_channel,
        }


def load_settings() -> EngineSettings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return EngineSettings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except ConfigError:
        raise
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
