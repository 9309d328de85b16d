"""
Sink abstractions and concrete implementations.

A sink receives one complete, already-rendered JSON line per event.
Sinks never raise back into the caller: failures are counted and
reported through the ``jslog`` stdlib logger by ``SinkLogger``.
"""

from __future__ import annotations

import io
import logging
import sys
import threading
import weakref
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import structlog

# Diagnostics about the library itself go through stdlib logging, so they
# stay silent until the host application configures the "jslog" logger.
diagnostics = structlog.wrap_logger(
    logging.getLogger("jslog"),
    wrapper_class=structlog.stdlib.BoundLogger,
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.render_to_log_kwargs,
    ],
)


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def write_line(self, line: str) -> None:
        """Write one rendered event, without its trailing newline."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


def _is_binary(stream: Any) -> bool:
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


class StreamSink(BaseSink):
    """Writes lines to any object with a ``write`` method.

    Each line and its newline go out in a single ``write`` call while the
    sink's lock is held, so lines from concurrent threads never interleave.

    Args:
        stream: Destination (default: sys.stdout)
        binary: Force bytes (True) or text (False); detected when omitted
    """

    def __init__(self, stream: Any = None, *, binary: bool | None = None):
        self._stream = stream if stream is not None else sys.stdout
        self._binary = _is_binary(self._stream) if binary is None else binary
        self._lock = threading.Lock()

    @property
    def stream(self) -> Any:
        return self._stream

    def write_line(self, line: str) -> None:
        data: str | bytes = line + "\n"
        if self._binary:
            data = data.encode("utf-8")
        with self._lock:
            self._stream.write(data)
            flush = getattr(self._stream, "flush", None)
            if flush is not None:
                flush()

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"StreamSink(stream={self._stream!r})"


class FileSink(StreamSink):
    """Append-only UTF-8 file sink. Rotation is left to external tooling."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(open(self._path, "a", encoding="utf-8"), binary=False)

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        with self._lock:
            self._stream.close()

    def __repr__(self) -> str:
        return f"FileSink(path={str(self._path)!r})"


_shared_sinks: weakref.WeakValueDictionary[int, StreamSink] = weakref.WeakValueDictionary()
_shared_lock = threading.Lock()


def as_sink(target: Any = None) -> BaseSink:
    """Wrap a raw stream in a ``StreamSink``; ``None`` means sys.stdout.

    Loggers given the same raw stream share one ``StreamSink`` (and its
    lock), so their lines never interleave on that stream.
    """
    if isinstance(target, BaseSink):
        return target
    stream = target if target is not None else sys.stdout
    with _shared_lock:
        sink = _shared_sinks.get(id(stream))
        if sink is None or sink.stream is not stream:
            sink = StreamSink(stream)
            _shared_sinks[id(stream)] = sink
        return sink


# =============================================================================
# structlog adapter
# =============================================================================


class SinkLogger:
    """structlog wrapped logger that writes rendered lines to a sink.

    Every level method writes the line and returns it, so the caller can
    reuse the exact serialized event (``panic`` carries it as a payload).
    """

    def __init__(self, sink: BaseSink):
        self.sink = sink
        self._dropped = 0
        self._lock = threading.Lock()

    @property
    def dropped(self) -> int:
        return self._dropped

    def record_drop(self, reason: str, level: str, exc: BaseException) -> None:
        with self._lock:
            self._dropped += 1
        diagnostics.debug(
            "jslog.event_dropped",
            reason=reason,
            level=level,
            error_type=type(exc).__name__,
            error_detail=str(exc),
        )

    def _write(self, level: str, line: str) -> str:
        try:
            self.sink.write_line(line)
        except Exception as exc:
            # A broken sink must never break the application that is logging.
            self.record_drop("write", level, exc)
        return line

    def trace(self, line: str) -> str:
        return self._write("trace", line)

    def info(self, line: str) -> str:
        return self._write("info", line)

    def warn(self, line: str) -> str:
        return self._write("warn", line)

    def error(self, line: str) -> str:
        return self._write("error", line)

    def panic(self, line: str) -> str:
        return self._write("panic", line)

    def fatal(self, line: str) -> str:
        return self._write("fatal", line)
