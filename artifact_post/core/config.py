from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables.

    Upload tuning uses the ``ARTIFACT_POST_`` prefix, e.g.
    ``ARTIFACT_POST_READ_TIMEOUT=120``. The SVN revision comes from the
    build environment's plain ``SVN_REVISION`` variable.

    Lookup is case-insensitive and a ``.env`` file in the working directory
    is read as well, so ``svn_revision`` or a ``SVN_REVISION=`` line in
    ``.env`` also fill the field. A real environment variable wins over
    ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARTIFACT_POST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Transport timeouts, in seconds. There is no overall deadline.
    connect_timeout: float = 30.0
    read_timeout: float = 60.0

    # Where JsonFileConfigStore keeps the global defaults.
    config_path: str = "artifact-post.json"

    # Sent verbatim as the SVN_REVISION header; empty when unset.
    svn_revision: str = Field(
        default="",
        validation_alias=AliasChoices("SVN_REVISION", "svn_revision"),
    )

    debug: bool = False

    @field_validator("connect_timeout", "read_timeout")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v


def get_settings() -> Settings:
    return Settings()
