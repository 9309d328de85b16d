"""
Call-site resolution.

Resolvers receive the frame of the Logger's public level method (``info``,
``errorf``...) and walk outward to the code that asked for the log line.

Two strategies are available:

- ``FixedDepth``: ascend a constant number of frames. Cheap but fragile:
  every wrapper between the caller and the Logger needs one more frame
  (``METHOD_CALLER_DEPTH + 1`` for one wrapper layer, ``+2`` for two...).
- ``LibraryScan``: skip every frame that belongs to this library, then
  optionally ``skip`` more frames for user wrappers. This is the default.
"""

from __future__ import annotations

import inspect
import os
from abc import ABC, abstractmethod
from types import FrameType

UNKNOWN_CALL_SITE = "?:0"

# Frames between a Logger level method and the code that called it.
METHOD_CALLER_DEPTH = 1

# Frames between a Logger level method and the caller of a module-level
# convenience function (one extra frame for the delegating function).
DEFAULT_CALLER_DEPTH = METHOD_CALLER_DEPTH + 1

DEFAULT_MAX_DEPTH = 25

_FALLBACK_LIBRARY = "jslog"


def format_frame(frame: FrameType) -> str:
    """Format a frame as ``<basename>:<line>``."""
    return f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"


def top_level_package(module: str) -> str:
    """Reduce a dotted module name to its top-level package."""
    return module.partition(".")[0]


def library_name() -> str:
    """Identity token of the frames that belong to this library.

    Resolved from this function's own module, so a vendored or renamed copy
    of the package still recognizes its own frames.
    """
    frame = inspect.currentframe()
    try:
        if frame is None:
            return _FALLBACK_LIBRARY
        module = frame.f_globals.get("__name__") or ""
        return top_level_package(module) or _FALLBACK_LIBRARY
    finally:
        del frame


class CallSiteResolver(ABC):
    """Finds the ``file:line`` of the code that issued a log call."""

    @abstractmethod
    def resolve(self, frame: FrameType | None) -> str:
        """Resolve starting from the Logger's level method frame."""
        ...


class FixedDepth(CallSiteResolver):
    """Ascend exactly ``depth`` frames from the level method."""

    def __init__(self, depth: int = METHOD_CALLER_DEPTH):
        self.depth = depth

    def resolve(self, frame: FrameType | None) -> str:
        for _ in range(self.depth):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return UNKNOWN_CALL_SITE
        return format_frame(frame)

    def __repr__(self) -> str:
        return f"FixedDepth(depth={self.depth})"


class LibraryScan(CallSiteResolver):
    """Return the first frame outside ``library``, after ``skip`` more frames.

    Args:
        library: Top-level package whose frames are skipped.
        skip: External frames to skip once outside the library (user wrappers).
        min_skip: Innermost frames skipped unconditionally.
        max_depth: Upper bound on frames inspected, counted from the level method.
    """

    def __init__(
        self,
        library: str,
        skip: int = 0,
        min_skip: int = 0,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.library = library
        self.skip = skip
        self.min_skip = min_skip
        self.max_depth = max_depth
        self._prefix = library + "."

    def belongs_to_library(self, frame: FrameType) -> bool:
        module = frame.f_globals.get("__name__", "")
        return module == self.library or module.startswith(self._prefix)

    def resolve(self, frame: FrameType | None) -> str:
        depth = 0
        for _ in range(self.min_skip):
            if frame is None:
                return UNKNOWN_CALL_SITE
            frame = frame.f_back
            depth += 1

        remaining = self.skip
        while frame is not None and depth < self.max_depth:
            if not self.belongs_to_library(frame):
                if remaining == 0:
                    return format_frame(frame)
                remaining -= 1
            frame = frame.f_back
            depth += 1

        return UNKNOWN_CALL_SITE

    def __repr__(self) -> str:
        return (
            f"LibraryScan(library={self.library!r}, skip={self.skip}, "
            f"min_skip={self.min_skip}, max_depth={self.max_depth})"
        )
