"""
Application settings loaded from an env file and environment variables.
The service reads its identity, database location, and logging preferences from here.
Values already present in the process environment take precedence over the env file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DEFAULT_ENV_FILE: Final[str] = ".env"

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = (
    "APP_NAME",
    "APP_VERSION",
    "DATABASE_URL",
)

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "n", "off"})


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    APP_NAME: str
    APP_VERSION: str
    DATABASE_URL: str
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    LOG_DEVELOP_MODE: bool = False

    @field_validator("LOG_DEVELOP_MODE", mode="before")
    @classmethod
    def parse_bool_like(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "":
                return False
            if normalized in _TRUE_VALUES:
                return True
            if normalized in _FALSE_VALUES:
                return False
            raise ValueError(f"LOG_DEVELOP_MODE must be boolean-like, got {value!r}")
        return value


def load_settings(*, env_file: str | Path | None = DEFAULT_ENV_FILE, load_env: bool = True) -> Settings:
    """Load and validate settings from `env_file` and the process environment.

    A missing env file is not an error; the process environment alone is then
    expected to carry the required values.
    """

    if load_env and env_file is not None:
        load_dotenv(dotenv_path=env_file, override=False)

    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
    if missing:
        missing_values = ", ".join(sorted(missing))
        raise RuntimeError(
            f"Missing required environment variables: {missing_values}. "
            "Populate these values in `.env` or the process environment before starting the service."
        )

    try:
        return Settings.model_validate(dict(os.environ))
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
