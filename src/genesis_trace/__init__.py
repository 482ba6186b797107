"""Structured terminal logging with themed renderers and pluggable sinks."""

from .config import ConfigBuilder, EngineSettings, LoggerConfig, load_settings
from .exceptions import ConfigError, GenesisTraceError, PromptError, SinkError
from .logger import Logger
from .models import LogEntry, LogLevel
from .output import OutputSink
from .themes import Theme, available_themes, get_theme, register_theme

__all__ = [
    "ConfigBuilder",
    "ConfigError",
    "EngineSettings",
    "GenesisTraceError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "LoggerConfig",
    "OutputSink",
    "PromptError",
    "SinkError",
    "Theme",
    "available_themes",
    "get_theme",
    "load_settings",
    "register_theme",
]
