"""Global default configuration storage and resolution.

The global defaults live behind a ConfigStore so the host can back them
with whatever persistence it has. Two stores are provided:

  InMemoryConfigStore: for tests and hosts that keep config elsewhere.
  JsonFileConfigStore: a single JSON file ``{"url": ..., "headers": ...}``.

resolve_config() merges a job-level config over the defaults: a non-empty
job value always wins.
"""

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import structlog

from artifact_post.core.config import Settings, get_settings
from artifact_post.types import UploadConfig

logger = structlog.get_logger(__name__)

# Key of the global section in a submitted configuration form
FORM_SECTION = "http-post"


class ConfigStoreError(Exception):
    """Raised when stored configuration cannot be read or written."""


@runtime_checkable
class ConfigStore(Protocol):
    def load(self) -> UploadConfig: ...

    def save(self, config: UploadConfig) -> None: ...


class InMemoryConfigStore:
    def __init__(self, config: Optional[UploadConfig] = None) -> None:
        self._config = config or UploadConfig()

    def load(self) -> UploadConfig:
        return self._config

    def save(self, config: UploadConfig) -> None:
        self._config = config


class JsonFileConfigStore:
    """Persists the global defaults to a JSON file.

    A missing file loads as an empty config. Unknown keys are ignored.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "JsonFileConfigStore":
        """Store at the configured ``config_path``."""
        settings = settings or get_settings()
        return cls(settings.config_path)

    def load(self) -> UploadConfig:
        if not self.path.exists():
            logger.debug("config_file_missing", path=str(self.path))
            return UploadConfig()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigStoreError(f"Cannot read {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigStoreError(f"Expected a JSON object in {self.path}")

        return UploadConfig.from_form(data)

    def save(self, config: UploadConfig) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(config.to_dict(), indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigStoreError(f"Cannot write {self.path}: {exc}") from exc

        logger.info("config_saved", path=str(self.path))


def configure_defaults(store: ConfigStore, form: Mapping[str, Any]) -> UploadConfig:
    """Bind the global section of a submitted form and save it."""
    section = form.get(FORM_SECTION) or {}
    config = UploadConfig.from_form(section)
    store.save(config)
    return config


def resolve_config(job: UploadConfig, defaults: UploadConfig) -> UploadConfig:
    """Merge job-level values over the global defaults, field by field."""
    return UploadConfig(
        url=job.url or defaults.url or "",
        headers=job.headers or defaults.headers or "",
    )
