# This file defines runtime settings for the HTTP layer in one place.
# Route prefixes, table names, CORS origins, and the health probe timeout are configured here.
# The loader starts from the shared service settings and reads API_* environment variables on top.
# Table names are validated as plain SQL identifiers because they are interpolated into queries.

from __future__ import annotations

import os
import re
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator

from idm.common.settings import Settings, get_settings

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "idm"
    app_version: str = "0.0.0"
    api_version_path: str = "/api/v1"
    internal_path: str = "/internal"
    schema_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8080
    database_url: str
    health_check_timeout_seconds: float = 2.0
    allowed_origins: list[str] = Field(default_factory=list)
    employee_table_name: str = "employee"
    role_table_name: str = "role"

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_version_path must start with '/'.")
        parts = [part for part in value.split("/") if part]
        if len(parts) < 2 or parts[-1].startswith("v") is False:
            raise ValueError("api_version_path must look like '/api/v1'.")
        return value.rstrip("/")

    @field_validator("internal_path")
    @classmethod
    def validate_internal_path(cls, value: str) -> str:
        if not value.startswith("/") or value.strip("/") == "":
            raise ValueError("internal_path must look like '/internal'.")
        return value.rstrip("/")

    @field_validator("employee_table_name", "role_table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("health_check_timeout_seconds")
    @classmethod
    def validate_positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, settings: Settings | None = None) -> ApiConfig:
    """Build API configuration from service settings and `API_*` variables."""

    resolved = settings or get_settings()
    config_values: dict[str, object] = {
        "api_name": resolved.APP_NAME,
        "app_version": resolved.APP_VERSION,
        "database_url": resolved.DATABASE_URL,
        "api_version_path": os.getenv("API_VERSION_PATH", "/api/v1"),
        "internal_path": os.getenv("API_INTERNAL_PATH", "/internal"),
        "schema_version": os.getenv("API_SCHEMA_VERSION", "1.0.0"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8080),
        "health_check_timeout_seconds": _env_float("API_HEALTH_CHECK_TIMEOUT_SECONDS", 2.0),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "employee_table_name": os.getenv("API_EMPLOYEE_TABLE_NAME", "employee"),
        "role_table_name": os.getenv("API_ROLE_TABLE_NAME", "role"),
    }
    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
