"""
Field coercion and merging.

Permanent fields always win over per-call fields on key collision.
"""

from __future__ import annotations

from typing import Any, Mapping

Fields = Mapping[str, Any]

NIL = "nil"


def coerce(value: Any) -> str:
    """Render a value in its default string form, with ``None`` as ``"nil"``.

    Never raises: a value whose ``__str__`` fails, or returns something other
    than a string, renders as ``<unprintable TypeName>``.
    """
    if value is None:
        return NIL
    if isinstance(value, str):
        return value
    try:
        text = str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"
    if not isinstance(text, str):
        return f"<unprintable {type(value).__name__}>"
    return text


def merge_fields(per_call: Fields | None, permanent: Fields | None) -> dict[str, str]:
    """Merge per-call and permanent fields into a fresh dict of strings.

    Keys present in ``permanent`` overwrite the same keys in ``per_call``;
    every other key passes through unchanged. Non-string keys are coerced
    like values. Neither input is mutated.
    """
    merged: dict[str, str] = {}
    for source in (per_call, permanent):
        if not source:
            continue
        for key, value in source.items():
            merged[coerce(key)] = coerce(value)
    return merged
