"""
Exception hierarchy.

Logging calls never raise on their own account; the only exception a
caller sees is ``LogPanic``, which it asked for by logging at ``panic``.
"""

from __future__ import annotations

from typing import Any, Dict

from .levels import Level


class LoggerError(Exception):
    """Base class for jslog exceptions."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class LogPanic(LoggerError):
    """Raised after a ``panic`` event has been written.

    ``payload`` is the serialized event line, without the trailing newline.
    """

    def __init__(self, payload: str, *, file: str | None = None) -> None:
        details = {"file": file} if file else None
        super().__init__(payload, code="LOG_PANIC", details=details)
        self.payload = payload
        self.level = Level.PANIC
