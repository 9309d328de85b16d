"""
Process-wide default Logger and the module-level convenience functions.

The default instance writes to sys.stdout with no permanent fields. Tests
and hosts redirect it with ``set_output`` or replace it outright with
``set_default_logger``.
"""

from __future__ import annotations

import threading
from typing import Any

from .config import LoggerConfig
from .core import Logger
from .fields import Fields

_lock = threading.Lock()


def _build_default(sink: Any = None, config: LoggerConfig | None = None) -> Logger:
    """Create a Logger whose call sites are resolved through the free functions.

    ``config`` is expressed in terms of direct Logger callers. A fixed-depth
    policy is pushed one frame deeper for the delegating function; the scan
    policy skips that frame on its own since it lives in this package.
    """
    config = config or LoggerConfig()
    if config.call_site.strategy == "fixed":
        config = config.model_copy(update={"call_site": config.call_site.wrapped()})
    return Logger(sink, None, config)


_default_logger: Logger = _build_default()


def get_default_logger() -> Logger:
    return _default_logger


def set_default_logger(logger: Logger) -> Logger:
    """Install ``logger`` as the default instance and return the previous one.

    ``logger`` is used as-is: with a fixed-depth policy it must already
    account for the extra frame of the free functions.
    """
    global _default_logger
    with _lock:
        previous, _default_logger = _default_logger, logger
    return previous


def set_output(sink: Any, config: LoggerConfig | None = None) -> Logger:
    """Redirect the default instance to ``sink``. Returns the previous instance."""
    return set_default_logger(_build_default(sink, config))


def reset_default_logger() -> Logger:
    """Restore a default instance writing to sys.stdout."""
    return set_default_logger(_build_default())


def trace(msg: Any) -> None:
    """Call the default Logger's trace method."""
    _default_logger.trace(msg)


def tracef(fields: Fields | None, msg: Any) -> None:
    """Call the default Logger's tracef method."""
    _default_logger.tracef(fields, msg)


def info(msg: Any) -> None:
    """Call the default Logger's info method."""
    _default_logger.info(msg)


def infof(fields: Fields | None, msg: Any) -> None:
    """Call the default Logger's infof method."""
    _default_logger.infof(fields, msg)


def warn(msg: Any) -> None:
    """Call the default Logger's warn method."""
    _default_logger.warn(msg)


def warnf(fields: Fields | None, msg: Any) -> None:
    """Call the default Logger's warnf method."""
    _default_logger.warnf(fields, msg)


def error(msg: Any) -> None:
    """Call the default Logger's error method."""
    _default_logger.error(msg)


def errorf(fields: Fields | None, msg: Any) -> None:
    """Call the default Logger's errorf method."""
    _default_logger.errorf(fields, msg)


def panic(msg: Any) -> None:
    """Call the default Logger's panic method."""
    _default_logger.panic(msg)


def panicf(fields: Fields | None, msg: Any) -> None:
    """Call the default Logger's panicf method."""
    _default_logger.panicf(fields, msg)


def fatal(msg: Any) -> None:
    """Call the default Logger's fatal method."""
    _default_logger.fatal(msg)


def fatalf(fields: Fields | None, msg: Any) -> None:
    """Call the default Logger's fatalf method."""
    _default_logger.fatalf(fields, msg)
