import io
import json
import typing as t

import pytest

import jslog


@pytest.fixture
def buffer() -> io.StringIO:
    """In-memory text sink."""
    return io.StringIO()


@pytest.fixture
def read_events() -> t.Callable[[io.StringIO], list[dict]]:
    """Parse every line written to a buffer as one JSON event."""

    def _read(buf: io.StringIO) -> list[dict]:
        return [json.loads(line) for line in buf.getvalue().splitlines()]

    return _read


@pytest.fixture
def exit_calls() -> list[int]:
    """Exit statuses recorded instead of terminating the test process."""
    return []


@pytest.fixture
def default_output(buffer):
    """
    Redirects the process-wide default Logger to ``buffer`` for one test
    and restores the previous instance afterwards.
    """
    previous = jslog.set_output(buffer)
    yield buffer
    jslog.set_default_logger(previous)
