"""Build log sinks.

The uploader writes progress as plain text lines. The host decides where
they go by passing any object with a ``log(line)`` method.
"""

import logging
import sys
from typing import Optional, Protocol, TextIO, runtime_checkable


@runtime_checkable
class BuildListener(Protocol):
    def log(self, line: str) -> None: ...


class StreamListener:
    """Writes each line to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def log(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()


class LoggerListener:
    """Forwards each line to a stdlib logger at INFO."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("artifact_post.build")

    def log(self, line: str) -> None:
        self._logger.info("%s", line)
