"""Upload build artifacts to an HTTP endpoint as one multipart POST.

Public API:
    ArtifactUploader(config, store).perform(build, listener) -> True
    upload_artifacts(build, listener, config, defaults) -> UploadOutcome
    validate_url(value) / validate_headers(value) -> FormValidation
"""

from artifact_post.listener import BuildListener, LoggerListener, StreamListener
from artifact_post.store import (
    ConfigStore,
    ConfigStoreError,
    InMemoryConfigStore,
    JsonFileConfigStore,
    configure_defaults,
    resolve_config,
)
from artifact_post.types import (
    Artifact,
    BuildContext,
    BuildResult,
    HeaderLine,
    OutcomeStatus,
    UploadConfig,
    UploadOutcome,
    UploadResult,
)
from artifact_post.uploader import ArtifactUploader, upload_artifacts
from artifact_post.validation import FormValidation, validate_headers, validate_url

__all__ = [
    "Artifact",
    "ArtifactUploader",
    "BuildContext",
    "BuildListener",
    "BuildResult",
    "ConfigStore",
    "ConfigStoreError",
    "FormValidation",
    "HeaderLine",
    "InMemoryConfigStore",
    "JsonFileConfigStore",
    "LoggerListener",
    "OutcomeStatus",
    "StreamListener",
    "UploadConfig",
    "UploadOutcome",
    "UploadResult",
    "configure_defaults",
    "resolve_config",
    "upload_artifacts",
    "validate_headers",
    "validate_url",
]
