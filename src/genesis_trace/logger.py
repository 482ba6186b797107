"""Structured logger with a bounded history and an isolated sink pipeline."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping
from typing import Any

from .config import ConfigBuilder, LoggerConfig
from .history import History
from .models import LogEntry, LogLevel, split_namespace
from .output import OutputSink
from .plugins.base import Sink
from .plugins.console import ConsoleSink


class SinkPipeline:
    """Fan entries out to sinks in attachment order, one failure domain per sink."""

    def __init__(self, sinks: tuple[Sink, ...], diagnostics: logging.Logger) -> None:
        self.sinks = sinks
        self.diagnostics = diagnostics
        self._degraded: set[Sink] = set()
        self._warned: set[Sink] = set()

    @property
    def degraded(self) -> tuple[Sink, ...]:
        return tuple(sink for sink in self.sinks if sink in self._degraded)

    def start(self, config: LoggerConfig) -> None:
        for sink in self.sinks:
            try:
                sink.start(config)
            except Exception as exc:
                self._report(sink, exc, phase="start")

    def dispatch(self, entry: LogEntry) -> None:
        for sink in self.sinks:
            if sink in self._degraded or not sink.accepts(entry.level):
                continue
            try:
                sink.handle(entry)
            except Exception as exc:
                self._report(sink, exc, phase="handle")

    async def drain(self) -> None:
        """Await every sink's outstanding work, then close it."""
        for sink in self.sinks:
            for phase in ("flush", "close"):
                try:
                    await getattr(sink, phase)()
                except Exception as exc:
                    self._report(sink, exc, phase=phase)

    def _report(self, sink: Sink, exc: Exception, *, phase: str) -> None:
        if sink.degrade_on_error and phase in ("start", "handle"):
            self._degraded.add(sink)
        if sink in self._warned:
            return
        self._warned.add(sink)
        if sink in self._degraded:
            self.diagnostics.warning(
                "Sink %s degraded after %s failure (%s); it will be skipped from now on",
                sink.id,
                phase,
                exc,
                extra={"sink_id": sink.id, "phase": phase},
            )
        else:
            self.diagnostics.warning(
                "Sink %s failed during %s: %s",
                sink.id,
                phase,
                exc,
                extra={"sink_id": sink.id, "phase": phase},
            )


class _SharedState:
    """State a logger shares by reference with every child derived from it."""

    def __init__(
        self,
        config: LoggerConfig,
        pipeline: SinkPipeline,
        diagnostics: logging.Logger,
    ) -> None:
        self.config = config
        self.pipeline = pipeline
        self.diagnostics = diagnostics
        self.history = History(max_entries=config.max_history_size) if config.history_enabled else None
        self.sequence = itertools.count(1)
        self.closed = False


class Logger:
    """Level-filtered structured logger.

    A console sink writing to ``output`` is always attached first; the
    config's plugins follow in the order they were added. Logging calls
    never raise because of a sink.
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        *,
        output: OutputSink | None = None,
        diagnostics: logging.Logger | None = None,
    ) -> None:
        config = config or ConfigBuilder().build()
        diagnostics = diagnostics or logging.getLogger("genesis_trace")
        console = ConsoleSink(
            output,
            theme=config.theme,
            timestamp_format=config.timestamp_format,
        )
        pipeline = SinkPipeline((console, *config.plugins), diagnostics)
        pipeline.start(config)
        self._state = _SharedState(config, pipeline, diagnostics)
        self.namespace: tuple[str, ...] = config.namespace

    @classmethod
    def _derive(cls, state: _SharedState, namespace: tuple[str, ...]) -> Logger:
        logger = cls.__new__(cls)
        logger._state = state
        logger.namespace = namespace
        return logger

    @property
    def config(self) -> LoggerConfig:
        return self._state.config

    @property
    def sinks(self) -> tuple[Sink, ...]:
        return self._state.pipeline.sinks

    @property
    def degraded_sinks(self) -> tuple[Sink, ...]:
        return self._state.pipeline.degraded

    @property
    def closed(self) -> bool:
        return self._state.closed

    def child(self, namespace: str) -> Logger:
        """Handle sharing history and sinks, emitting under an extended namespace."""
        return Logger._derive(self._state, self.namespace + split_namespace(namespace))

    def log(
        self,
        level: LogLevel | str,
        message: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        state = self._state
        level = LogLevel.parse(level)
        if level < state.config.min_level:
            return
        if state.closed:
            state.diagnostics.debug("Dropped %s entry logged after shutdown", level.key)
            return
        entry = LogEntry(
            sequence=next(state.sequence),
            level=level,
            message=str(message),
            namespace=self.namespace,
            metadata=metadata or {},
        )
        if state.history is not None:
            state.history.append(entry)
        state.pipeline.dispatch(entry)

    def debug(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.DEBUG, message, metadata)

    def info(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.INFO, message, metadata)

    def success(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.SUCCESS, message, metadata)

    def warning(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.WARNING, message, metadata)

    def error(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.ERROR, message, metadata)

    def critical(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.CRITICAL, message, metadata)

    def get_history(
        self,
        *,
        level: LogLevel | str | None = None,
        namespace: str | None = None,
    ) -> tuple[LogEntry, ...]:
        """Filtered, read-only view of the shared history (empty when disabled)."""
        history = self._state.history
        if history is None:
            return ()
        return history.snapshot(level=level, namespace=namespace)

    async def shutdown(self) -> None:
        """Flush and close every sink; later log calls are dropped.

        Shutting down any handle shuts down the pipeline shared with its
        parent and children.
        """
        state = self._state
        if state.closed:
            return
        state.closed = True
        await state.pipeline.drain()
