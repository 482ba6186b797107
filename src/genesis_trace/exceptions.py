"""Engine exception classes."""


class GenesisTraceError(Exception):
    """Base class for all engine errors."""


class ConfigError(GenesisTraceError):
    """Raised when builder input or environment configuration is invalid."""


class SinkError(GenesisTraceError):
    """Raised by a sink when it cannot accept an entry."""

    def __init__(self, message: str, *, sink_id: str | None = None) -> None:
        super().__init__(message)
        self.sink_id = sink_id


class PromptError(GenesisTraceError, EOFError):
    """Raised when the input stream closes while a prompt waits for an answer."""


class ResultsFileError(GenesisTraceError):
    """Raised when a pipeline results file cannot be read or validated."""
