"""Types for the artifact upload step.

UploadConfig is the job-level / global-default configuration record.
BuildContext carries what the host build system hands to the uploader.
UploadResult and UploadOutcome capture what happened during one invocation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Any, Mapping, Optional


class BuildResult(StrEnum):
    """Build result, ordered from best to worst."""

    SUCCESS = "success"
    UNSTABLE = "unstable"
    FAILURE = "failure"
    NOT_BUILT = "not_built"
    ABORTED = "aborted"

    @property
    def ordinal(self) -> int:
        return _RESULT_ORDER.index(self)

    def is_worse_or_equal_to(self, other: "BuildResult") -> bool:
        return self.ordinal >= other.ordinal


_RESULT_ORDER = list(BuildResult)


@dataclass(frozen=True)
class UploadConfig:
    """Target URL plus raw multiline ``Name: Value`` header text."""

    url: str = ""
    headers: str = ""

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "UploadConfig":
        """Build a config from a submitted form; absent fields become ``""``."""
        url = data.get("url")
        headers = data.get("headers")
        return cls(
            url="" if url is None else str(url),
            headers="" if headers is None else str(headers),
        )

    def to_dict(self) -> dict:
        return {"url": self.url, "headers": self.headers}


@dataclass(frozen=True)
class HeaderLine:
    """A single parsed ``name: value`` pair."""

    name: str
    value: str


@dataclass(frozen=True)
class Artifact:
    """A build-produced file. Owned by the build system; never modified here."""

    file_name: str
    path: Path


@dataclass
class BuildContext:
    """The slice of a build the uploader needs."""

    project_name: str
    number: int
    timestamp: datetime
    result: BuildResult = BuildResult.SUCCESS
    artifacts: list[Artifact] = field(default_factory=list)

    @property
    def timestamp_millis(self) -> int:
        return int(self.timestamp.timestamp() * 1000)


@dataclass
class UploadResult:
    """Response summary for a single POST."""

    status_code: int
    reason: str
    elapsed_ms: int
    body: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def status_line(self) -> str:
        return f"{self.status_code} {self.reason} ({self.elapsed_ms}ms)"


class OutcomeStatus(StrEnum):
    SKIPPED = "skipped"
    SENT = "sent"
    FAILED = "failed"


@dataclass
class UploadOutcome:
    """What one upload invocation did.

    SKIPPED: nothing was sent (failed build, no artifacts, no URL).
    SENT: a response came back; check result.is_success for the status.
    FAILED: an exception interrupted the upload; error holds the traceback.
    """

    status: OutcomeStatus
    reason: Optional[str] = None
    result: Optional[UploadResult] = None
    error: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILED
