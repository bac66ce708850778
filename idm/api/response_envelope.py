# This file builds response envelopes for API endpoints in a consistent format.
# Success and error bodies share `success`, `message`, `data`, version, and request tracing fields.
# The helpers return plain dictionaries that Pydantic response models validate at runtime.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def utc_now() -> datetime:
    """Return timezone-aware UTC timestamp for response generation."""

    return datetime.now(tz=UTC)


def api_version_label(api_version_path: str) -> str:
    """Convert `/api/v1` style paths into `v1` labels."""

    cleaned = api_version_path.rstrip("/")
    parts = [part for part in cleaned.split("/") if part]
    if not parts:
        raise ValueError(f"Invalid api_version_path: {api_version_path!r}")
    return parts[-1]


def build_ok_envelope(
    *,
    api_version_path: str,
    schema_version: str,
    request_id: str,
    data: Any = None,
) -> dict[str, Any]:
    """Build the standard success envelope."""

    return {
        "success": True,
        "message": None,
        "data": data,
        "api_version": api_version_label(api_version_path),
        "schema_version": schema_version,
        "request_id": request_id,
        "generated_at": utc_now(),
    }


def build_error_envelope(
    *,
    api_version_path: str,
    schema_version: str,
    request_id: str,
    error_code: str,
    message: str,
    details: Any | None = None,
) -> dict[str, Any]:
    """Build the standard failure envelope."""

    return {
        "success": False,
        "message": message,
        "data": None,
        "error_code": error_code,
        "details": details,
        "api_version": api_version_label(api_version_path),
        "schema_version": schema_version,
        "request_id": request_id,
        "generated_at": utc_now(),
    }
