"""Artifact uploader: POSTs all build artifacts as one multipart request.

The upload flow:
1. Skip a failed build, a build without artifacts, or a job without a URL
2. Merge the job-level config over the global defaults
3. Send one multipart/form-data POST with one part per artifact, plus
   configured headers and build metadata headers
4. Write the request and response summary to the build log

Upload problems never fail the build. upload_artifacts() reports what
happened as an UploadOutcome; ArtifactUploader.perform() records a failed
outcome in the diagnostic log and returns True regardless.
"""

import time
import traceback
from contextlib import ExitStack
from typing import Optional

import httpx
import structlog

from artifact_post.core.config import Settings, get_settings
from artifact_post.headers import (
    build_metadata_headers,
    build_request_headers,
    parse_headers,
)
from artifact_post.listener import BuildListener
from artifact_post.store import ConfigStore, ConfigStoreError, resolve_config
from artifact_post.types import (
    BuildContext,
    BuildResult,
    OutcomeStatus,
    UploadConfig,
    UploadOutcome,
    UploadResult,
)

logger = structlog.get_logger(__name__)

LOG_PREFIX = "HTTP POST: "

# Parts carry raw bytes; no per-file type sniffing
PART_CONTENT_TYPE = "application/octet-stream"


def upload_artifacts(
    build: BuildContext,
    listener: BuildListener,
    config: UploadConfig,
    defaults: UploadConfig,
    *,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> UploadOutcome:
    """Upload the build's artifacts and return what happened.

    Never raises for settings, transport or file errors: those are written
    to the listener as a traceback and returned as a FAILED outcome.
    """
    if build.result.is_worse_or_equal_to(BuildResult.FAILURE):
        return _skip(listener, "Skipping because of FAILURE")

    if not build.artifacts:
        return _skip(listener, "No artifacts to POST")

    resolved = resolve_config(config, defaults)
    if not resolved.url:
        return _skip(listener, "No URL specified")

    try:
        if settings is None:
            settings = get_settings()
        result = _post(build, listener, resolved, settings, transport)
    except Exception:
        trace = traceback.format_exc()
        for line in trace.rstrip("\n").splitlines():
            listener.log(line)
        return UploadOutcome(status=OutcomeStatus.FAILED, error=trace)

    return UploadOutcome(status=OutcomeStatus.SENT, result=result)


def _skip(listener: BuildListener, reason: str) -> UploadOutcome:
    listener.log(LOG_PREFIX + reason)
    return UploadOutcome(status=OutcomeStatus.SKIPPED, reason=reason)


def _post(
    build: BuildContext,
    listener: BuildListener,
    config: UploadConfig,
    settings: Settings,
    transport: Optional[httpx.BaseTransport],
) -> UploadResult:
    configured = parse_headers(
        config.headers,
        on_malformed=lambda line: listener.log(
            f"{LOG_PREFIX}Ignoring malformed header: {line}"
        ),
    )

    svn_revision = settings.svn_revision
    listener.log(f"---> SVN_REVISION {svn_revision}")

    headers = build_request_headers(
        configured, build_metadata_headers(build, svn_revision)
    )
    timeout = httpx.Timeout(settings.read_timeout, connect=settings.connect_timeout)

    with ExitStack() as stack:
        files = []
        for artifact in build.artifacts:
            fileobj = stack.enter_context(artifact.path.open("rb"))
            files.append(
                (artifact.file_name, (artifact.file_name, fileobj, PART_CONTENT_TYPE))
            )

        client = stack.enter_context(httpx.Client(timeout=timeout, transport=transport))
        request = client.build_request("POST", config.url, headers=headers, files=files)

        listener.log(f"---> POST {config.url}")
        encoding = headers.encoding
        for name, value in headers.raw:
            listener.log(f"{name.decode(encoding)}: {value.decode(encoding)}")

        start = time.monotonic()
        response = client.send(request)
        elapsed_ms = int((time.monotonic() - start) * 1000)

        result = UploadResult(
            status_code=response.status_code,
            reason=response.reason_phrase,
            elapsed_ms=elapsed_ms,
            body=response.text,
        )

    listener.log(f"<--- {result.status_line()}")
    listener.log(result.body)
    return result


class ArtifactUploader:
    """Post-build step bound to one job's configuration.

    The global defaults are loaded from ``store`` at the start of each
    perform() call, so a concurrent save is seen by the next build.
    """

    def __init__(
        self,
        config: UploadConfig,
        store: ConfigStore,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.settings = settings
        self.transport = transport

    def perform(self, build: BuildContext, listener: BuildListener) -> bool:
        """Run the upload. Always returns True so the build is never failed."""
        try:
            defaults = self.store.load()
        except ConfigStoreError as exc:
            listener.log(f"{LOG_PREFIX}Cannot load default configuration: {exc}")
            logger.warning("defaults_unavailable", error=str(exc))
            defaults = UploadConfig()

        outcome = upload_artifacts(
            build,
            listener,
            self.config,
            defaults,
            settings=self.settings,
            transport=self.transport,
        )

        log = logger.bind(job=build.project_name, build_number=build.number)
        if outcome.is_failure:
            # Not propagated: the build result never depends on the upload.
            log.warning("upload_failed", error=outcome.error)
        elif outcome.status == OutcomeStatus.SENT and outcome.result is not None:
            log.info(
                "upload_sent",
                status_code=outcome.result.status_code,
                elapsed_ms=outcome.result.elapsed_ms,
            )
        else:
            log.info("upload_skipped", reason=outcome.reason)

        return True
