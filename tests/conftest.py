"""Shared fixtures for the artifact-post test suite.

Artifacts are real files under tmp_path. The network is replaced with
httpx.MockTransport, so no test opens a socket.
"""

from datetime import datetime, timezone

import pytest

from artifact_post.core.config import Settings
from artifact_post.types import Artifact, BuildContext, BuildResult

BUILD_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
BUILD_TIME_MILLIS = 1709294400000


class RecordingListener:
    """Collects build log lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def log(self, line: str) -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def artifacts(tmp_path) -> list[Artifact]:
    a = tmp_path / "a.txt"
    a.write_text("hello artifact\n")
    b = tmp_path / "b.zip"
    b.write_bytes(b"PK\x03\x04\x00\xffbinary")
    return [Artifact("a.txt", a), Artifact("b.zip", b)]


@pytest.fixture
def build(artifacts) -> BuildContext:
    return BuildContext(
        project_name="demo-job",
        number=42,
        timestamp=BUILD_TIME,
        result=BuildResult.SUCCESS,
        artifacts=artifacts,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(svn_revision="1234", _env_file=None)
