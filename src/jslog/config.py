"""
Logger Configuration.

Configuration is passed explicitly at construction; nothing is read from
the environment or from files.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .callsite import (
    DEFAULT_MAX_DEPTH,
    METHOD_CALLER_DEPTH,
    CallSiteResolver,
    FixedDepth,
    LibraryScan,
)

CallSiteStrategy = Literal["scan", "fixed"]


class TimeFormat(str, Enum):
    RFC3339NANO = "rfc3339nano"
    UNIXNANO = "unixnano"


class CallSiteConfig(BaseModel):
    """How the reported ``file:line`` is located on the stack.

    - ``scan``: skip every frame of this library, then ``skip`` more frames.
    - ``fixed``: ascend ``depth`` frames from the Logger's level method.

    For both strategies, each helper function a caller wraps around the
    Logger costs one frame; use ``wrapped()`` to account for it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy: CallSiteStrategy = "scan"
    depth: int = Field(default=METHOD_CALLER_DEPTH, description="Frames to ascend (fixed)")
    skip: int = Field(default=0, description="External frames to skip after leaving the library (scan)")
    min_skip: int = Field(default=0, description="Innermost frames skipped unconditionally (scan)")
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, description="Maximum frames inspected (scan)")

    @field_validator("depth", "skip", "min_skip")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"frame counts must be non-negative, got {v}")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_depth must be at least 1, got {v}")
        return v

    def wrapped(self, layers: int = 1) -> CallSiteConfig:
        """Return a copy adjusted for ``layers`` wrapper functions."""
        if self.strategy == "fixed":
            return self.model_copy(update={"depth": self.depth + layers})
        return self.model_copy(update={"skip": self.skip + layers})

    def build(self, library: str) -> CallSiteResolver:
        if self.strategy == "fixed":
            return FixedDepth(self.depth)
        return LibraryScan(
            library,
            skip=self.skip,
            min_skip=self.min_skip,
            max_depth=self.max_depth,
        )


class LoggerConfig(BaseModel):
    """Per-Logger configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    call_site: CallSiteConfig = Field(default_factory=CallSiteConfig)
    time_format: TimeFormat = Field(default=TimeFormat.RFC3339NANO, description="Format of _metadata.time")
