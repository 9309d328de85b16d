"""
Sink unit tests.
"""

from __future__ import annotations

import io
import json

from jslog import FileSink, Logger, StreamSink
from jslog.sinks import SinkLogger, as_sink


class _RecordingStream:
    """Records every write call separately."""

    def __init__(self) -> None:
        self.writes: list = []
        self.flushes = 0

    def write(self, data) -> None:
        self.writes.append(data)

    def flush(self) -> None:
        self.flushes += 1


class TestStreamSink:
    def test_one_write_per_line(self) -> None:
        stream = _RecordingStream()
        sink = StreamSink(stream)
        sink.write_line('{"a":1}')
        sink.write_line('{"b":2}')
        assert stream.writes == ['{"a":1}\n', '{"b":2}\n']
        assert stream.flushes == 2

    def test_binary_stream_receives_bytes(self) -> None:
        stream = io.BytesIO()
        Logger(stream).info("héllo")
        data = stream.getvalue()
        assert isinstance(data, bytes)
        assert data.endswith(b"\n")
        assert json.loads(data.decode("utf-8"))["message"] == "héllo"

    def test_binary_override(self) -> None:
        stream = _RecordingStream()
        StreamSink(stream, binary=True).write_line("x")
        assert stream.writes == [b"x\n"]

    def test_stream_without_flush(self) -> None:
        class WriteOnly:
            def __init__(self) -> None:
                self.data = ""

            def write(self, data) -> None:
                self.data += data

        stream = WriteOnly()
        StreamSink(stream).write_line("x")
        assert stream.data == "x\n"

    def test_as_sink(self) -> None:
        buf = io.StringIO()
        sink = StreamSink(buf)
        assert as_sink(sink) is sink
        assert as_sink(buf).stream is buf

    def test_as_sink_shares_one_sink_per_stream(self) -> None:
        buf = io.StringIO()
        assert as_sink(buf) is as_sink(buf)
        assert as_sink(buf) is not as_sink(io.StringIO())
        assert Logger(buf).sink is Logger(buf).sink

    def test_stdout_logger_shares_default_sink(self, monkeypatch) -> None:
        import sys

        import jslog

        monkeypatch.setattr(sys, "stdout", io.StringIO())
        previous = jslog.reset_default_logger()
        try:
            assert Logger(sys.stdout).sink is jslog.get_default_logger().sink
            assert Logger().sink is jslog.get_default_logger().sink
        finally:
            jslog.set_default_logger(previous)


class TestFileSink:
    def test_appends_across_loggers(self, tmp_path) -> None:
        path = tmp_path / "logs" / "app.log"

        first = FileSink(path)
        Logger(first).info("one")
        first.close()

        second = FileSink(path)
        Logger(second, {"run": 2}).info("two")
        second.close()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["one", "two"]
        assert json.loads(lines[1])["fields"] == {"run": "2"}
        assert second.path == path


class TestSinkLogger:
    def test_level_methods_return_line(self) -> None:
        buf = io.StringIO()
        logger = SinkLogger(StreamSink(buf))
        for name in ("trace", "info", "warn", "error", "panic", "fatal"):
            assert getattr(logger, name)(name) == name
        assert buf.getvalue().split() == ["trace", "info", "warn", "error", "panic", "fatal"]
        assert logger.dropped == 0
