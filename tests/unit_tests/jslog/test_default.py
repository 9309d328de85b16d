"""
Default Logger and module-level function tests.
"""

from __future__ import annotations

import io
import os
import sys

import pytest

import jslog
from jslog import Level, Logger, LogPanic

THIS_FILE = os.path.basename(__file__)

MSG = "hello"
FIELDS = {"hello": "world"}


def _expect(event: dict, level: Level, fields) -> None:
    assert event["_metadata"]["level"] == level.value
    assert event.get("fields") == fields
    assert event["message"] == MSG
    assert event["_metadata"]["file"].startswith(THIS_FILE + ":")


class TestFreeFunctions:
    def test_every_level(self, default_output, read_events) -> None:
        jslog.trace(MSG)
        jslog.tracef(FIELDS, MSG)
        jslog.info(MSG)
        jslog.infof(FIELDS, MSG)
        jslog.warn(MSG)
        jslog.warnf(FIELDS, MSG)
        jslog.error(MSG)
        jslog.errorf(FIELDS, MSG)
        with pytest.raises(LogPanic):
            jslog.panic(MSG)
        with pytest.raises(LogPanic):
            jslog.panicf(FIELDS, MSG)

        events = read_events(default_output)
        expected = [
            (Level.TRACE, None),
            (Level.TRACE, FIELDS),
            (Level.INFO, None),
            (Level.INFO, FIELDS),
            (Level.WARN, None),
            (Level.WARN, FIELDS),
            (Level.ERROR, None),
            (Level.ERROR, FIELDS),
            (Level.PANIC, None),
            (Level.PANIC, FIELDS),
        ]
        assert len(events) == len(expected)
        for event, (level, fields) in zip(events, expected):
            _expect(event, level, fields)

    def test_fatal_uses_default_logger_exit_hook(self, buffer, read_events, exit_calls) -> None:
        previous = jslog.set_default_logger(Logger(buffer, exit_func=exit_calls.append))
        try:
            jslog.fatal(MSG)
            jslog.fatalf(FIELDS, MSG)
        finally:
            jslog.set_default_logger(previous)

        assert exit_calls == [1, 1]
        first, second = read_events(buffer)
        assert first["_metadata"]["level"] == second["_metadata"]["level"] == "fatal"
        assert second["fields"] == FIELDS

    def test_reported_line_is_the_caller(self, default_output, read_events) -> None:
        jslog.info(MSG)
        line = sys._getframe().f_lineno - 1
        [event] = read_events(default_output)
        assert event["_metadata"]["file"] == f"{THIS_FILE}:{line}"


class TestDefaultInstance:
    def test_set_output_swaps_and_returns_previous(self) -> None:
        original = jslog.get_default_logger()
        buf = io.StringIO()
        previous = jslog.set_output(buf)
        try:
            assert previous is original
            assert jslog.get_default_logger() is not original
            assert jslog.get_default_logger().sink.stream is buf
        finally:
            jslog.set_default_logger(original)
        assert jslog.get_default_logger() is original

    def test_reset_targets_stdout(self) -> None:
        original = jslog.get_default_logger()
        try:
            jslog.reset_default_logger()
            logger = jslog.get_default_logger()
            assert logger.sink.stream is sys.stdout
            assert dict(logger.permanent_fields) == {}
        finally:
            jslog.set_default_logger(original)

    def test_fixed_depth_is_adjusted_for_free_functions(self, buffer) -> None:
        config = jslog.LoggerConfig(call_site=jslog.CallSiteConfig(strategy="fixed"))
        previous = jslog.set_output(buffer, config)
        try:
            assert jslog.get_default_logger().config.call_site.depth == jslog.DEFAULT_CALLER_DEPTH
        finally:
            jslog.set_default_logger(previous)

    def test_scan_is_not_adjusted(self, buffer) -> None:
        previous = jslog.set_output(buffer)
        try:
            call_site = jslog.get_default_logger().config.call_site
            assert call_site.strategy == "scan"
            assert call_site.skip == 0
        finally:
            jslog.set_default_logger(previous)
