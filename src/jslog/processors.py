"""
structlog processors that turn one log call into one JSON line.

Input event dict (built by ``Logger._log``)::

    {"event": <message>, "fields": <per-call fields>, "file": "<file>:<line>"}

Output: the rendered string
``{"_metadata":{"level":..,"file":..,"time":..},"fields":{..},"message":..}``.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable, Mapping, Any

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

from .callsite import UNKNOWN_CALL_SITE
from .config import TimeFormat
from .fields import coerce, merge_fields

# =============================================================================
# Timestamps
# =============================================================================


def format_rfc3339nano(ns: int) -> str:
    """UTC RFC3339 with nanoseconds, trailing zeros trimmed (``...05.12Z``)."""
    seconds, nanos = divmod(ns, 1_000_000_000)
    stamp = datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    if nanos:
        stamp += "." + f"{nanos:09d}".rstrip("0")
    return stamp + "Z"


def format_unixnano(ns: int) -> str:
    return str(ns)


_TIME_FORMATTERS: dict[TimeFormat, Callable[[int], str]] = {
    TimeFormat.RFC3339NANO: format_rfc3339nano,
    TimeFormat.UNIXNANO: format_unixnano,
}


# =============================================================================
# Processors
# =============================================================================


class MergeFields:
    """Merge per-call fields under the Logger's permanent fields.

    The ``fields`` key is removed entirely when the merged set is empty.
    """

    def __init__(self, permanent: Mapping[str, Any]):
        self._permanent = permanent

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        merged = merge_fields(event_dict.pop("fields", None), self._permanent)
        if merged:
            event_dict["fields"] = merged
        return event_dict


class AddMetadata:
    """Add the ``_metadata`` triple: level, call site and timestamp."""

    def __init__(self, time_format: TimeFormat = TimeFormat.RFC3339NANO, clock: Callable[[], int] = time.time_ns):
        self._format_time = _TIME_FORMATTERS[time_format]
        self._clock = clock

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["_metadata"] = {
            "level": method_name,
            "file": event_dict.pop("file", UNKNOWN_CALL_SITE),
            "time": self._format_time(self._clock()),
        }
        return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename structlog's 'event' to 'message', coerced to text."""
    event_dict["message"] = coerce(event_dict.pop("event", None))
    return event_dict


def render_json(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Serialize in wire order; unserializable events are dropped, never raised."""
    ordered = {"_metadata": event_dict["_metadata"]}
    if "fields" in event_dict:
        ordered["fields"] = event_dict["fields"]
    ordered["message"] = event_dict["message"]
    try:
        return orjson.dumps(ordered).decode()
    except orjson.JSONEncodeError as exc:
        record_drop = getattr(logger, "record_drop", None)
        if record_drop is not None:
            record_drop("serialize", method_name, exc)
        raise structlog.DropEvent from exc


def build_processors(
    permanent: Mapping[str, Any],
    time_format: TimeFormat = TimeFormat.RFC3339NANO,
    clock: Callable[[], int] = time.time_ns,
) -> list[Any]:
    return [
        MergeFields(permanent),
        AddMetadata(time_format, clock),
        rename_event_key,
        render_json,
    ]
