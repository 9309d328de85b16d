"""
The Logger.

One call = merge fields, resolve the call site, render one JSON line,
write it to the sink, then apply the level's side effect (``panic`` raises
``LogPanic``, ``fatal`` exits the process).
"""

from __future__ import annotations

import inspect
import os
import time
from types import MappingProxyType
from typing import Any, Callable, Mapping

import structlog

from .callsite import CallSiteResolver, library_name
from .config import LoggerConfig
from .exceptions import LogPanic
from .fields import Fields, coerce
from .levels import FATAL_EXIT_CODE, Level
from .processors import build_processors
from .sinks import BaseSink, SinkLogger, as_sink


class Logger:
    """Structured JSON logger.

    Every event carries ``_metadata`` (level, ``file:line`` of the caller,
    UTC timestamp), the merged ``fields`` and the ``message``.

    Args:
        sink: Where lines go. A ``BaseSink`` or any writable stream
            (default: sys.stdout).
        permanent_fields: Fields added to every event. On key collision they
            take priority over the fields passed to ``infof`` and friends.
        config: Call-site policy and time format.
        exit_func: Called with the exit status after a ``fatal`` event.

    Write and serialization failures are swallowed and counted in
    ``dropped``: logging never raises into the application.

    Loggers built on the same raw stream (``Logger(sys.stdout)`` and the
    default instance, say) share one ``StreamSink`` and its lock, so their
    lines never interleave. Two distinct ``BaseSink`` objects wrapping the
    same stream do not share a lock.
    """

    def __init__(
        self,
        sink: Any = None,
        permanent_fields: Fields | None = None,
        config: LoggerConfig | None = None,
        *,
        exit_func: Callable[[int], Any] = os._exit,
        clock: Callable[[], int] = time.time_ns,
    ):
        self._config = config or LoggerConfig()
        self._sink = as_sink(sink)
        self._permanent_fields: Mapping[str, Any] = MappingProxyType(dict(permanent_fields or {}))
        self._library = library_name()
        self._resolver: CallSiteResolver = self._config.call_site.build(self._library)
        self._exit = exit_func
        self._sink_logger = SinkLogger(self._sink)
        self._pipeline = structlog.BoundLogger(
            self._sink_logger,
            processors=build_processors(self._permanent_fields, self._config.time_format, clock),
            context={},
        )

    @property
    def sink(self) -> BaseSink:
        return self._sink

    @property
    def permanent_fields(self) -> Mapping[str, Any]:
        return self._permanent_fields

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def library(self) -> str:
        return self._library

    @property
    def dropped(self) -> int:
        """Events lost to serialization or sink write failures."""
        return self._sink_logger.dropped

    # =========================================================================
    # Level methods
    # =========================================================================

    def trace(self, msg: Any) -> None:
        """Log a message at the trace level."""
        self._log(Level.TRACE, None, msg)

    def tracef(self, fields: Fields | None, msg: Any) -> None:
        """Log fields and a message at the trace level."""
        self._log(Level.TRACE, fields, msg)

    def info(self, msg: Any) -> None:
        """Log a message at the info level."""
        self._log(Level.INFO, None, msg)

    def infof(self, fields: Fields | None, msg: Any) -> None:
        """Log fields and a message at the info level."""
        self._log(Level.INFO, fields, msg)

    def warn(self, msg: Any) -> None:
        """Log a message at the warn level."""
        self._log(Level.WARN, None, msg)

    def warnf(self, fields: Fields | None, msg: Any) -> None:
        """Log fields and a message at the warn level."""
        self._log(Level.WARN, fields, msg)

    def error(self, msg: Any) -> None:
        """Log a message at the error level."""
        self._log(Level.ERROR, None, msg)

    def errorf(self, fields: Fields | None, msg: Any) -> None:
        """Log fields and a message at the error level."""
        self._log(Level.ERROR, fields, msg)

    def panic(self, msg: Any) -> None:
        """Log a message at the panic level, then raise ``LogPanic``."""
        self._log(Level.PANIC, None, msg)

    def panicf(self, fields: Fields | None, msg: Any) -> None:
        """Log fields and a message at the panic level, then raise ``LogPanic``."""
        self._log(Level.PANIC, fields, msg)

    def fatal(self, msg: Any) -> None:
        """Log a message at the fatal level, then exit with status 1."""
        self._log(Level.FATAL, None, msg)

    def fatalf(self, fields: Fields | None, msg: Any) -> None:
        """Log fields and a message at the fatal level, then exit with status 1."""
        self._log(Level.FATAL, fields, msg)

    def log(self, level: Level | str, msg: Any, fields: Fields | None = None) -> None:
        """Log at a level given by value (``"warn"``, ``Level.WARN``...)."""
        self._log(Level(level), fields, msg)

    # =========================================================================
    # Internals
    # =========================================================================

    def _call_site(self) -> str:
        # Two frames up: _call_site -> _log -> level method.
        frame = inspect.currentframe()
        try:
            method_frame = frame.f_back.f_back if frame is not None else None
            return self._resolver.resolve(method_frame)
        finally:
            del frame

    def _log(self, level: Level, fields: Fields | None, msg: Any) -> None:
        file = self._call_site()
        line = getattr(self._pipeline, level.value)(msg, fields=fields, file=file)

        if level.raises:
            raise LogPanic(line if line is not None else coerce(msg), file=file)
        if level.exits:
            self._exit(FATAL_EXIT_CODE)

    def __repr__(self) -> str:
        return f"Logger(sink={self._sink!r}, permanent_fields={dict(self._permanent_fields)!r})"
