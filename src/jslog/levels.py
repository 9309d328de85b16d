"""
Severity levels.
"""

from __future__ import annotations

from enum import Enum


class Level(str, Enum):
    """Closed set of severities, lowest first."""

    TRACE = "trace"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    PANIC = "panic"
    FATAL = "fatal"

    @property
    def raises(self) -> bool:
        """Whether logging at this level raises ``LogPanic`` after the write."""
        return self is Level.PANIC

    @property
    def exits(self) -> bool:
        """Whether logging at this level terminates the process after the write."""
        return self is Level.FATAL

    def __str__(self) -> str:
        return self.value


# Exit status used by fatal-level calls.
FATAL_EXIT_CODE = 1
