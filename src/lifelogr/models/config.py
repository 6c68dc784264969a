"""Configuration models."""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TRUE_VALUES = {"true", "1", "yes", "on"}


def parse_flag(value: Any) -> bool:
    """Interpret a stored flag, treating anything unrecognised as False."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


class Settings(BaseSettings):
    """Settings for a single invocation.

    Values come, lowest precedence first, from the field defaults, the user
    settings file (passed in as keyword arguments), a local ``.env`` file and
    ``LIFELOGR_*`` environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="LIFELOGR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    repository_path: Optional[Path] = Field(None, description="Journal repository working copy")
    push_by_default: bool = Field(False, description="Push after every commit")
    credential_namespace: str = Field("git", description="Prefix of secret store keys")
    credential_username: Optional[str] = Field(None, description="Account name stored with the remote secret")

    # Logging
    log_level: str = "WARNING"

    @field_validator("repository_path", mode="before")
    @classmethod
    def _normalise_path(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return Path(value).expanduser()

    @field_validator("credential_username", mode="before")
    @classmethod
    def _normalise_username(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("push_by_default", mode="before")
    @classmethod
    def _normalise_flag(cls, value: Any) -> bool:
        return parse_flag(value)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Stored user values arrive as init kwargs and must lose to .env and
        # the environment.
        return env_settings, dotenv_settings, init_settings

    @classmethod
    def load(cls, store, env_file: Optional[Path] = Path(".env")) -> "Settings":
        """Build settings from a SettingsStore plus .env and environment.

        Args:
            store: SettingsStore holding the user-scoped values
            env_file: Local override file, or None to skip it

        Returns:
            Settings instance
        """
        return cls(_env_file=env_file, **store.as_dict())
