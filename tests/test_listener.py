"""Tests for the build log sinks."""

import io
import logging

from artifact_post.listener import BuildListener, LoggerListener, StreamListener


def test_stream_listener_writes_lines() -> None:
    stream = io.StringIO()
    listener = StreamListener(stream)
    listener.log("first")
    listener.log("second")
    assert stream.getvalue() == "first\nsecond\n"


def test_stream_listener_defaults_to_stdout(capsys) -> None:
    StreamListener().log("to stdout")
    assert capsys.readouterr().out == "to stdout\n"


def test_logger_listener_forwards_at_info(caplog) -> None:
    logger = logging.getLogger("artifact_post.test")
    with caplog.at_level(logging.INFO, logger="artifact_post.test"):
        LoggerListener(logger).log("---> POST http://x")
    assert caplog.records[0].getMessage() == "---> POST http://x"
    assert caplog.records[0].levelno == logging.INFO


def test_listeners_satisfy_protocol() -> None:
    assert isinstance(StreamListener(), BuildListener)
    assert isinstance(LoggerListener(), BuildListener)
