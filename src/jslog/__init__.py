"""
Structured JSON logging.

Every call writes one JSON object per line:

    {"_metadata":{"level":"info","file":"app.py:12","time":"..."},"fields":{...},"message":"..."}

- Levels: trace, info, warn, error, panic (raises LogPanic), fatal (exits)
- Permanent fields win over per-call fields on key collision
- ``file`` points at the caller, not at this library

Library: structlog processor chain + orjson serialization.
"""

from .callsite import (
    DEFAULT_CALLER_DEPTH,
    METHOD_CALLER_DEPTH,
    UNKNOWN_CALL_SITE,
)
from .config import CallSiteConfig, LoggerConfig, TimeFormat
from .core import Logger
from .default import (
    error,
    errorf,
    fatal,
    fatalf,
    get_default_logger,
    info,
    infof,
    panic,
    panicf,
    reset_default_logger,
    set_default_logger,
    set_output,
    trace,
    tracef,
    warn,
    warnf,
)
from .exceptions import LoggerError, LogPanic
from .fields import Fields, merge_fields
from .levels import Level
from .sinks import BaseSink, FileSink, StreamSink

__all__ = [
    "BaseSink",
    "CallSiteConfig",
    "DEFAULT_CALLER_DEPTH",
    "Fields",
    "FileSink",
    "Level",
    "LogPanic",
    "Logger",
    "LoggerConfig",
    "LoggerError",
    "METHOD_CALLER_DEPTH",
    "StreamSink",
    "TimeFormat",
    "UNKNOWN_CALL_SITE",
    "error",
    "errorf",
    "fatal",
    "fatalf",
    "get_default_logger",
    "info",
    "infof",
    "merge_fields",
    "panic",
    "panicf",
    "reset_default_logger",
    "set_default_logger",
    "set_output",
    "trace",
    "tracef",
    "warn",
    "warnf",
]
