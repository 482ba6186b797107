"""Log sinks: console (always attached), rotating file, and Slack webhook."""

from .base import Sink
from .console import ConsoleSink
from .file import FileLoggerPlugin
from .slack import SlackLoggerPlugin

__all__ = ["ConsoleSink", "FileLoggerPlugin", "SlackLoggerPlugin", "Sink"]
